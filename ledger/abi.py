"""ABI fragment of the commitment contract (only the entry points used here)."""

COMMITMENT_CONTRACT_ABI = [
    {
        "type": "function",
        "name": "commit_service_request",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "request_id", "type": "bytes32"},
            {"name": "requestor", "type": "bytes32"},
            {"name": "provider", "type": "bytes32"},
            {"name": "amount", "type": "uint256"},
            {"name": "timestamp", "type": "bytes32"},
        ],
        "outputs": [],
    },
    {
        "type": "function",
        "name": "get_commitment_of",
        "stateMutability": "view",
        "inputs": [{"name": "request_id", "type": "bytes32"}],
        "outputs": [
            {"name": "requestor", "type": "bytes32"},
            {"name": "provider", "type": "bytes32"},
            {"name": "amount", "type": "uint256"},
            {"name": "is_completed", "type": "uint8"},
        ],
    },
]
