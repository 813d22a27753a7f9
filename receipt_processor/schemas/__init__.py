from receipt_processor.schemas.api import (  # noqa: F401
    ErrorResponse,
    PointsResponse,
    ProcessReceiptResponse,
    ReceiptRecordResponse,
)
from receipt_processor.schemas.receipt import Amount, Item, Receipt  # noqa: F401
