"""Source document data model."""

from pydantic import BaseModel, ConfigDict


class Document(BaseModel):
    """A support document read from disk, before chunking."""

    model_config = ConfigDict(frozen=True)

    source: str  # file name, used as the grouping key in the chunk store
    content: str
    file_format: str = "txt"  # "txt", "pdf"
