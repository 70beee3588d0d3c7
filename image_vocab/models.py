"""Data models for the image vocabulary extractor."""

import mimetypes
from enum import Enum
from pathlib import Path
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .config import DEFAULT_MIME_TYPE


class WordEntry(BaseModel):
    """An English word recognized in an image, with its Chinese translation."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    english_word: str = Field(alias="englishWord")
    chinese_translation: str = Field(alias="chineseTranslation")

    @property
    def key(self) -> str:
        """Deduplication key: the English word, lower-cased."""
        return self.english_word.lower()


class ImageInput(BaseModel):
    """A user-selected image: either a file on disk or in-memory bytes."""

    model_config = ConfigDict(frozen=True)

    name: str
    mime_type: str = DEFAULT_MIME_TYPE
    path: Optional[Path] = None
    content: Optional[bytes] = None

    @classmethod
    def from_path(cls, path: Path) -> "ImageInput":
        path = Path(path)
        mime_type, _ = mimetypes.guess_type(path.name)
        return cls(name=path.name, mime_type=mime_type or DEFAULT_MIME_TYPE, path=path)


class AnalysisResult(BaseModel):
    """Unique words of one analysis run, in first-seen order."""

    model_config = ConfigDict(frozen=True)

    words: Tuple[WordEntry, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.words


class RunPhase(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    EMPTY = "empty"
    ERROR = "error"


class RunState(BaseModel):
    """Read-only view of where the current analysis run stands."""

    model_config = ConfigDict(frozen=True)

    phase: RunPhase = RunPhase.IDLE
    result: Optional[AnalysisResult] = None
    message: Optional[str] = None

    @classmethod
    def idle(cls) -> "RunState":
        return cls()

    @classmethod
    def loading(cls) -> "RunState":
        return cls(phase=RunPhase.LOADING)

    @classmethod
    def success(cls, result: AnalysisResult) -> "RunState":
        return cls(phase=RunPhase.SUCCESS, result=result)

    @classmethod
    def empty(cls, message: str) -> "RunState":
        return cls(phase=RunPhase.EMPTY, message=message)

    @classmethod
    def error(cls, message: str) -> "RunState":
        return cls(phase=RunPhase.ERROR, message=message)
