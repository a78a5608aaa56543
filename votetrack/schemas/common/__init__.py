from .response_schemas import BaseResponse, ErrorDetails, PaginationMeta

__all__ = ["BaseResponse", "ErrorDetails", "PaginationMeta"]
