"""hl-exchange — web3_infra package.

- AssetIndex: symbol → asset index from the exchange universe
- ActionEncoder: canonical tuples, wire actions, connection ids
- TypedDataSigner: EIP-712 signing of L1 actions, transfers, agent approval
- select_domain / Network: domain parameters per network and action family
"""

from .action_encoder import ActionEncoder, EncodedAction, scale_margin
from .asset_index import AssetIndex
from .keys import KeySource, derive_address, generate_agent_key, secure_random_key
from .signing_domain import ActionFamily, Network, SigningDomain, select_domain
from .typed_data_signer import TypedDataSigner

__all__ = [
    "ActionEncoder",
    "ActionFamily",
    "AssetIndex",
    "EncodedAction",
    "KeySource",
    "Network",
    "SigningDomain",
    "TypedDataSigner",
    "derive_address",
    "generate_agent_key",
    "scale_margin",
    "secure_random_key",
    "select_domain",
]
