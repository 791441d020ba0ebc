"""Static method table for the HTTP dispatcher.

Maps each CLI command name to its category (used for routing) and the names
of its positional parameters (documentation only; params are never checked
against them).
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType


@dataclass(frozen=True, slots=True)
class Endpoint:
    """Routing metadata for one CLI command."""

    category: str
    params: tuple[str, ...] = ()


_ENDPOINTS: dict[str, Endpoint] = {
    # Blockchain
    "getbestblockhash": Endpoint("blockchain", ()),
    "getblock": Endpoint("blockchain", ("blockhash", "verbosity")),
    "getblockchaininfo": Endpoint("blockchain", ()),
    "getblockcount": Endpoint("blockchain", ()),
    "getblockfilter": Endpoint("blockchain", ("blockhash", "filtertype")),
    "getblockhash": Endpoint("blockchain", ("height",)),
    "getblockheader": Endpoint("blockchain", ("blockhash", "verbose")),
    "getblockstats": Endpoint("blockchain", ("hash_or_height", "stats")),
    "getchaintips": Endpoint("blockchain", ()),
    "getchaintxstats": Endpoint("blockchain", ("nblocks", "blockhash")),
    "getdifficulty": Endpoint("blockchain", ()),
    "getmempoolancestors": Endpoint("blockchain", ("txid", "verbose")),
    "getmempooldescendants": Endpoint("blockchain", ("txid", "verbose")),
    "getmempoolentry": Endpoint("blockchain", ("txid",)),
    "getmempoolinfo": Endpoint("blockchain", ()),
    "getrawmempool": Endpoint("blockchain", ("verbose",)),
    "gettxout": Endpoint("blockchain", ("txid", "n", "include_mempool")),
    "gettxoutproof": Endpoint("blockchain", ("txids", "blockhash")),
    "gettxoutsetinfo": Endpoint("blockchain", ()),
    "preciousblock": Endpoint("blockchain", ("blockhash",)),
    "pruneblockchain": Endpoint("blockchain", ("height",)),
    "savemempool": Endpoint("blockchain", ()),
    "scantxoutset": Endpoint("blockchain", ("action", "scanobjects")),
    "verifychain": Endpoint("blockchain", ("checklevel", "nblocks")),
    "verifytxoutproof": Endpoint("blockchain", ("proof",)),

    # Name operations
    "name_delete": Endpoint("names", ("name",)),
    "name_filter": Endpoint("names", ("regexp", "maxage", "from", "nb", "stat", "valuetype")),
    "name_history": Endpoint("names", ("name", "fullhistory", "valuetype")),
    "name_indexinfo": Endpoint("names", ()),
    "name_list": Endpoint("names", ("name", "valuetype")),
    "name_mempool": Endpoint("names", ("valuetype",)),
    "name_new": Endpoint("names", ("name", "value", "days", "toaddress", "valuetype")),
    "name_scan": Endpoint("names", ("start-name", "max-returned", "max-value-length", "valuetype")),
    "name_scan_address": Endpoint("names", ("address", "max-value-length", "valuetype")),
    "name_show": Endpoint("names", ("name", "valuetype", "filepath")),
    "name_update": Endpoint("names", ("name", "value", "days", "toaddress", "valuetype")),
    "name_updatemany": Endpoint("names", ("operations",)),
    "sendtoname": Endpoint("names", ("name", "amount", "comment", "comment_to")),

    # Control
    "getinfo": Endpoint("control", ()),
    "getmemoryinfo": Endpoint("control", ("mode",)),
    "getrpcinfo": Endpoint("control", ()),
    "help": Endpoint("control", ("command",)),
    "logging": Endpoint("control", ("include_category", "exclude_category")),
    "stop": Endpoint("control", ()),
    "uptime": Endpoint("control", ()),

    # Generating
    "generate": Endpoint("generating", ("nblocks", "maxtries")),
    "generatetoaddress": Endpoint("generating", ("nblocks", "address", "maxtries")),

    # Mining
    "getauxblock": Endpoint("mining", ("hash", "auxpow")),
    "getblocktemplate": Endpoint("mining", ("template_request",)),
    "getmininginfo": Endpoint("mining", ()),
    "getnetworkhashps": Endpoint("mining", ("nblocks", "height")),
    "prioritisetransaction": Endpoint("mining", ("txid", "dummy", "fee_delta")),
    "submitblock": Endpoint("mining", ("hexdata", "dummy")),
    "submitheader": Endpoint("mining", ("hexdata",)),

    # Network
    "addnode": Endpoint("network", ("node", "command")),
    "clearbanned": Endpoint("network", ()),
    "disconnectnode": Endpoint("network", ("address", "nodeid")),
    "getaddednodeinfo": Endpoint("network", ("node",)),
    "getcheckpoint": Endpoint("network", ()),
    "getconnectioncount": Endpoint("network", ()),
    "getnettotals": Endpoint("network", ()),
    "getnetworkinfo": Endpoint("network", ()),
    "getnodeaddresses": Endpoint("network", ("count",)),
    "getpeerinfo": Endpoint("network", ()),
    "listbanned": Endpoint("network", ()),
    "ping": Endpoint("network", ()),
    "setban": Endpoint("network", ("subnet", "command", "bantime", "absolute")),
    "setnetworkactive": Endpoint("network", ("state",)),

    # Randpay
    "randpay_accept": Endpoint("randpay", ("hexstring", "flags")),
    "randpay_mkchap": Endpoint("randpay", ("amount", "risk", "timeout")),
    "randpay_mktx": Endpoint("randpay", ("chap", "timeout", "flags")),

    # Raw transactions
    "analyzepsbt": Endpoint("rawtransactions", ("psbt",)),
    "combinepsbt": Endpoint("rawtransactions", ("psbts",)),
    "combinerawtransaction": Endpoint("rawtransactions", ("hexstrings",)),
    "converttopsbt": Endpoint("rawtransactions", ("hexstring", "permitsigdata", "iswitness")),
    "createpsbt": Endpoint("rawtransactions", ("inputs", "outputs", "locktime", "replaceable")),
    "createrawtransaction": Endpoint("rawtransactions", ("inputs", "outputs", "locktime", "replaceable")),
    "decodepsbt": Endpoint("rawtransactions", ("psbt",)),
    "decoderawtransaction": Endpoint("rawtransactions", ("hexstring", "iswitness")),
    "decodescript": Endpoint("rawtransactions", ("hexstring",)),
    "finalizepsbt": Endpoint("rawtransactions", ("psbt", "extract")),
    "fundrawtransaction": Endpoint("rawtransactions", ("hexstring", "options", "iswitness")),
    "getrawtransaction": Endpoint("rawtransactions", ("txid", "verbose", "blockhash")),
    "joinpsbts": Endpoint("rawtransactions", ("psbts",)),
    "sendrawtransaction": Endpoint("rawtransactions", ("hexstring", "maxfeerate")),
    "signrawtransactionwithkey": Endpoint("rawtransactions", ("hexstring", "privkeys", "prevtxs", "sighashtype")),
    "testmempoolaccept": Endpoint("rawtransactions", ("rawtxs", "maxfeerate")),
    "utxoupdatepsbt": Endpoint("rawtransactions", ("psbt", "descriptors")),

    # Util
    "createmultisig": Endpoint("util", ("nrequired", "keys", "address_type")),
    "deriveaddresses": Endpoint("util", ("descriptor", "range")),
    "estimatesmartfee": Endpoint("util", ("conf_target", "estimate_mode")),
    "getdescriptorinfo": Endpoint("util", ("descriptor",)),
    "signmessagewithprivkey": Endpoint("util", ("privkey", "message")),
    "validateaddress": Endpoint("util", ("address",)),
    "verifymessage": Endpoint("util", ("address", "signature", "message")),

    # Wallet
    "abandontransaction": Endpoint("wallet", ("txid",)),
    "abortrescan": Endpoint("wallet", ()),
    "addmultisigaddress": Endpoint("wallet", ("nrequired", "keys", "label", "address_type")),
    "backupwallet": Endpoint("wallet", ("destination",)),
    "createwallet": Endpoint("wallet", ("wallet_name", "disable_private_keys", "blank", "passphrase", "avoid_reuse")),
    "dumpprivkey": Endpoint("wallet", ("address",)),
    "dumpwallet": Endpoint("wallet", ("filename",)),
    "encryptwallet": Endpoint("wallet", ("passphrase",)),
    "getaddressesbylabel": Endpoint("wallet", ("label",)),
    "getaddressinfo": Endpoint("wallet", ("address",)),
    "getbalance": Endpoint("wallet", ("dummy", "minconf", "include_watchonly", "avoid_reuse")),
    "getbalances": Endpoint("wallet", ()),
    "getnewaddress": Endpoint("wallet", ("label", "address_type")),
    "getrawchangeaddress": Endpoint("wallet", ("address_type",)),
    "getreceivedbyaddress": Endpoint("wallet", ("address", "minconf")),
    "getreceivedbylabel": Endpoint("wallet", ("label", "minconf")),
    "gettransaction": Endpoint("wallet", ("txid", "include_watchonly", "verbose")),
    "getunconfirmedbalance": Endpoint("wallet", ()),
    "getwalletinfo": Endpoint("wallet", ()),
    "importaddress": Endpoint("wallet", ("address", "label", "rescan", "p2sh")),
    "importmulti": Endpoint("wallet", ("requests", "options")),
    "importprivkey": Endpoint("wallet", ("privkey", "label", "rescan")),
    "importprunedfunds": Endpoint("wallet", ("rawtransaction", "txoutproof")),
    "importpubkey": Endpoint("wallet", ("pubkey", "label", "rescan")),
    "importwallet": Endpoint("wallet", ("filename",)),
    "keypoolrefill": Endpoint("wallet", ("newsize",)),
    "listaddressgroupings": Endpoint("wallet", ()),
    "listlabels": Endpoint("wallet", ("purpose",)),
    "listlockunspent": Endpoint("wallet", ()),
    "listreceivedbyaddress": Endpoint("wallet", ("minconf", "include_empty", "include_watchonly", "address_filter")),
    "listreceivedbylabel": Endpoint("wallet", ("minconf", "include_empty", "include_watchonly")),
    "listsinceblock": Endpoint("wallet", ("blockhash", "target_confirmations", "include_watchonly", "include_removed")),
    "listtransactions": Endpoint("wallet", ("label", "count", "skip", "include_watchonly")),
    "listunspent": Endpoint("wallet", ("minconf", "maxconf", "addresses", "include_unsafe", "query_options")),
    "listwalletdir": Endpoint("wallet", ()),
    "listwallets": Endpoint("wallet", ()),
    "loadwallet": Endpoint("wallet", ("filename",)),
    "lockunspent": Endpoint("wallet", ("unlock", "transactions")),
    "makekeypair": Endpoint("wallet", ("prefix",)),
    "removeprunedfunds": Endpoint("wallet", ("txid",)),
    "rescanblockchain": Endpoint("wallet", ("start_height", "stop_height")),
    "reservebalance": Endpoint("wallet", ("reserve", "amount")),
    "sendmany": Endpoint("wallet", ("dummy", "amounts", "minconf", "comment", "subtractfeefrom", "replaceable", "conf_target", "estimate_mode")),
    "sendtoaddress": Endpoint("wallet", ("address", "amount", "comment", "comment_to", "subtractfeefromamount", "replaceable", "conf_target", "estimate_mode", "avoid_reuse")),
    "sethdseed": Endpoint("wallet", ("newkeypool", "seed")),
    "setlabel": Endpoint("wallet", ("address", "label")),
    "settxfee": Endpoint("wallet", ("amount",)),
    "setwalletflag": Endpoint("wallet", ("flag", "value")),
    "signmessage": Endpoint("wallet", ("address", "message")),
    "signrawtransactionwithwallet": Endpoint("wallet", ("hexstring", "prevtxs", "sighashtype")),
    "unloadwallet": Endpoint("wallet", ("wallet_name",)),
    "walletcreatefundedpsbt": Endpoint("wallet", ("inputs", "outputs", "locktime", "options", "bip32derivs")),
    "walletlock": Endpoint("wallet", ()),
    "walletpassphrase": Endpoint("wallet", ("passphrase", "timeout", "mintonly")),
    "walletpassphrasechange": Endpoint("wallet", ("oldpassphrase", "newpassphrase")),
    "walletprocesspsbt": Endpoint("wallet", ("psbt", "sign", "sighashtype", "bip32derivs")),

    # ZMQ
    "getzmqnotifications": Endpoint("zmq", ()),
}

ENDPOINTS = MappingProxyType(_ENDPOINTS)


def by_category() -> dict[str, list[dict[str, object]]]:
    """Group the table by category, preserving declaration order."""
    categories: dict[str, list[dict[str, object]]] = {}
    for method, endpoint in ENDPOINTS.items():
        categories.setdefault(endpoint.category, []).append(
            {"method": method, "params": list(endpoint.params)}
        )
    return categories
