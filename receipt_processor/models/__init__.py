from receipt_processor.models.record import ReceiptRecord  # noqa: F401
