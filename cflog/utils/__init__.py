from .logging_setup import (
    CloudFunctionHandler,
    log_structured_entry,
    setup_logging,
)
