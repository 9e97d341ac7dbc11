from stablepay.core.networks import UNKNOWN_CHAIN_ID, UNKNOWN_NETWORK_NAME, describe_network


def test_known_networks_by_uri_substring():
    assert describe_network("https://rpc-mainnet-cardano-evm.c1.milkomeda.com").chain_id == "2001"
    assert describe_network("https://rpc.mordor.etccooperative.org").name == "Mordor Testnet"
    assert describe_network("https://rpc.mordor.etccooperative.org").short_name == "Mordor"
    assert describe_network("https://ethereum-sepolia.publicnode.com").chain_id == "11155111"
    assert describe_network("https://etc.rivet.link").name == "Ethereum Classic"


def test_match_is_case_insensitive():
    assert describe_network("https://RPC.SEPOLIA.org").name == "Sepolia"


def test_unknown_network_falls_back():
    info = describe_network("http://localhost:8545")

    assert info.name == UNKNOWN_NETWORK_NAME
    assert info.chain_id == UNKNOWN_CHAIN_ID
    assert info.is_known is False


def test_reported_chain_id_fills_unknown_network():
    info = describe_network("http://localhost:8545", reported_chain_id=1337)

    assert info.chain_id == "1337"
    assert info.name == UNKNOWN_NETWORK_NAME


def test_table_wins_over_reported_chain_id():
    assert describe_network("https://sepolia.example", reported_chain_id=1).chain_id == "11155111"


def test_none_uri_is_unknown():
    assert describe_network(None).chain_id == UNKNOWN_CHAIN_ID
