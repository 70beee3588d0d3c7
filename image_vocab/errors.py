"""Error taxonomy for the image vocabulary extractor.

Every error carries a ``user_message``: the single line of text shown to
the user when the error ends a run. ``BatchError`` subclasses are fatal to
a batch; ``ValidationError`` stops a run (or an export) before it starts.
"""

from typing import Optional

MSG_NO_IMAGES = "Please select at least one image first."
MSG_RUN_ACTIVE = "An analysis is already in progress."
MSG_BAD_FORMAT = (
    "The recognition result was not in the expected format. "
    "Try other images or try again later."
)
MSG_FAILED = "Text recognition failed. Please try again later."
MSG_NO_WORDS = "No prominent English words were recognized in any of the images."
MSG_NOTHING_TO_EXPORT = "There are no words to export."


class VocabError(Exception):
    """Base class for all errors raised by this package."""

    user_message = MSG_FAILED

    def __init__(self, message: str, user_message: Optional[str] = None):
        super().__init__(message)
        if user_message is not None:
            self.user_message = user_message


class ValidationError(VocabError):
    """The requested operation cannot start with the current state."""

    def __init__(self, message: str, user_message: Optional[str] = None):
        super().__init__(message, user_message or message)


class BatchError(VocabError):
    """An error that aborts every remaining image of a batch."""


class ReadError(BatchError):
    """An image could not be read for encoding."""


class NetworkError(BatchError):
    """The request to the inference service did not complete."""


class ServiceError(BatchError):
    """The inference service answered with an error or an unreadable body."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class ParseError(BatchError):
    """The recognized text is not a JSON array of word objects."""

    user_message = MSG_BAD_FORMAT


# Traditional Chinese renderings of the user messages
LOCALIZED_MESSAGES = {
    MSG_NO_IMAGES: "請先選擇至少一張圖片！",
    MSG_RUN_ACTIVE: "分析進行中，請稍候。",
    MSG_BAD_FORMAT: "文字辨識結果格式不正確，請嘗試其他圖片或稍後再試。",
    MSG_FAILED: "文字辨識失敗，請稍後再試。",
    MSG_NO_WORDS: "未從任何圖片中辨識到主要的英文單字。",
    MSG_NOTHING_TO_EXPORT: "沒有可匯出的單字。",
}

LANGUAGES = ("en", "zh-TW")


def localize(message: str, lang: str = "en") -> str:
    """Return the user message in ``lang``; unknown messages pass through."""
    if lang == "zh-TW":
        return LOCALIZED_MESSAGES.get(message, message)
    return message
