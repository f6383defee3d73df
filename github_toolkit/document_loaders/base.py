"""Document model and loader interface shared by the GitHub loaders."""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Any, Protocol

from pydantic import BaseModel, Field


class Document(BaseModel):
    """A piece of text plus the metadata describing where it came from."""

    page_content: str = Field(..., description="Text content of the document")
    metadata: dict[str, Any] = Field(
        default_factory=dict, description="Source attributes (url, path, ...)"
    )


class TextSplitter(Protocol):
    """Anything that can cut a text into chunks."""

    def split_text(self, text: str) -> list[str]: ...


def split_documents(
    splitter: TextSplitter, documents: Iterable[Document]
) -> list[Document]:
    """Split each document into chunks, copying its metadata onto every chunk."""
    chunks: list[Document] = []
    for document in documents:
        for text in splitter.split_text(document.page_content):
            chunks.append(
                Document(page_content=text, metadata=dict(document.metadata))
            )
    return chunks


class BaseLoader(ABC):
    """Base class for document loaders."""

    @abstractmethod
    def load(self) -> list[Document]:
        """Load all documents."""

    def load_and_split(self, splitter: TextSplitter) -> list[Document]:
        """Load documents and split them with ``splitter``."""
        return split_documents(splitter, self.load())
