"""DLMM Quoter - off-chain swap quotes for discretized-liquidity pools."""

from dlmm.bins import Bin, BinArray, BinArrayRange
from dlmm.pair import DynamicFeeParameters, PairState, StaticFeeParameters
from dlmm.price import id_from_price, price_from_id
from dlmm.service import InMemorySnapshotSource, QuoteService
from dlmm.swap import Quote, get_quote

__version__ = "0.1.0"
__all__ = [
    "Bin",
    "BinArray",
    "BinArrayRange",
    "PairState",
    "StaticFeeParameters",
    "DynamicFeeParameters",
    "price_from_id",
    "id_from_price",
    "get_quote",
    "Quote",
    "QuoteService",
    "InMemorySnapshotSource",
    "__version__",
]
