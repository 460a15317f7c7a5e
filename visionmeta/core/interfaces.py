"""
Core data types and abstract interfaces (Interface Segregation Principle).
Defines the contracts shared by injectors, the dispatcher and the
preprocessing pipeline.
"""
import base64
import mimetypes
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union


DEFAULT_PRODUCT = "VisionMeta AI Tagger"


@dataclass(frozen=True)
class MetadataRecord:
    """Title, description and ordered keywords to embed into an asset."""
    title: str
    description: str
    keywords: List[str] = field(default_factory=list)

    def keywords_joined(self, separator: str = "; ") -> str:
        return separator.join(self.keywords)

    def priority_keywords(self, count: int = 10) -> List[str]:
        """The first `count` keywords, which marketplaces weigh the most."""
        return list(self.keywords[:max(count, 0)])

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "MetadataRecord":
        """
        Build a record from the object returned by a metadata model.

        Keywords may be a list or a comma separated string. Whitespace is
        trimmed and empty entries dropped; order and duplicates are kept.
        """
        raw_keywords = payload.get("keywords") or []
        if isinstance(raw_keywords, str):
            raw_keywords = raw_keywords.split(",")

        keywords = [str(kw).strip() for kw in raw_keywords]

        return cls(
            title=str(payload.get("title") or "").strip(),
            description=str(payload.get("description") or "").strip(),
            keywords=[kw for kw in keywords if kw],
        )


@dataclass(frozen=True)
class MediaAsset:
    """Immutable media input: raw bytes plus declared MIME type and filename."""
    data: bytes
    mime_type: str
    filename: str

    @property
    def extension(self) -> str:
        return Path(self.filename).suffix.lower()

    @property
    def stem(self) -> str:
        return Path(self.filename).stem

    @property
    def size(self) -> int:
        return len(self.data)

    @classmethod
    def from_path(cls, path: Union[str, Path], mime_type: Optional[str] = None) -> "MediaAsset":
        """Read an asset from disk, guessing the MIME type when not given."""
        path = Path(path)
        if mime_type is None:
            mime_type, _ = mimetypes.guess_type(str(path))
        return cls(data=path.read_bytes(), mime_type=mime_type or "", filename=path.name)


class PassThroughReason(Enum):
    """Why an injector returned the input bytes unchanged."""
    UNSUPPORTED_FORMAT = "unsupported_format"
    MALFORMED_CONTAINER = "malformed_container"
    INJECTION_FAILURE = "injection_failure"


@dataclass(frozen=True)
class Embedded:
    """Metadata was written; `data` is a new buffer."""
    data: bytes
    mime_type: str

    @property
    def embedded(self) -> bool:
        return True


@dataclass(frozen=True)
class PassThrough:
    """Metadata was not written; `data` is the original buffer."""
    data: bytes
    mime_type: str
    reason: PassThroughReason
    detail: str = ""

    @property
    def embedded(self) -> bool:
        return False


InjectionResult = Union[Embedded, PassThrough]


@dataclass
class VideoDimensions:
    """Represents video dimensions with display and rotation info."""
    width: int
    height: int
    display_width: int = 0
    display_height: int = 0
    rotation: int = 0

    def __post_init__(self):
        if self.display_width == 0:
            self.display_width = self.width
        if self.display_height == 0:
            self.display_height = self.height


@dataclass(frozen=True)
class StoryboardFrame:
    """One capture of a storyboard: when to seek and where to draw it."""
    index: int
    timestamp: float
    x: int
    y: int


@dataclass
class AnalysisPayload:
    """Prepared bytes handed to the vision model."""
    data: bytes
    mime_type: str
    source: str

    def to_base64(self) -> str:
        return base64.b64encode(self.data).decode("ascii")


@dataclass
class EmbedConfig:
    """Configuration for metadata embedding."""
    software: str = DEFAULT_PRODUCT
    xmp_toolkit: str = DEFAULT_PRODUCT
    keyword_separator: str = "; "
    max_workers: int = 10


@dataclass
class CompressionConfig:
    """Configuration for downsampling oversized images before analysis."""
    size_threshold: int = 9 * 1024 * 1024
    max_dimension: int = 3840
    quality: int = 92


@dataclass
class StoryboardConfig:
    """Configuration for video storyboard generation."""
    max_frame_size: int = 800
    capture_points: Tuple[float, ...] = (0.10, 0.35, 0.60, 0.85)
    columns: int = 2
    quality: int = 85


@dataclass
class AnalysisConfig:
    """Configuration for the whole preprocessing pipeline."""
    compression: CompressionConfig = field(default_factory=CompressionConfig)
    storyboard: StoryboardConfig = field(default_factory=StoryboardConfig)


class IMetadataInjector(ABC):
    """Interface for format-specific metadata writers."""

    @abstractmethod
    def inject(self, asset: MediaAsset, record: MetadataRecord) -> InjectionResult:
        """Return a new buffer carrying `record`, or the original on pass-through."""
        pass


class IVideoInfoProvider(ABC):
    """Interface for video information extraction."""

    @abstractmethod
    async def load(self) -> None:
        """Load video metadata asynchronously."""
        pass

    @property
    @abstractmethod
    def duration(self) -> float:
        """Video duration in seconds."""
        pass

    @property
    @abstractmethod
    def dimensions(self) -> VideoDimensions:
        """Video dimensions."""
        pass


class IAnalysisPreparer(ABC):
    """Interface for turning an asset into a vision-model payload."""

    @abstractmethod
    async def prepare(self, asset: MediaAsset) -> AnalysisPayload:
        """Prepare an asset for analysis."""
        pass
