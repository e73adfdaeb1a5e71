from fastapi import status

from src.common.exceptions import detail_handler


class GenerationException(Exception):
    """The model replied, but not with the structure that was asked for."""

    def __init__(self, message: str, raw_text: str | None = None):
        self.raw_text = raw_text
        super().__init__(message)


generation_exception_handler = detail_handler(status.HTTP_400_BAD_REQUEST)
