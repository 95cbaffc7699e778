from pydantic import BaseModel, ConfigDict, Field


class Highlight(BaseModel):
    """Represents a single highlight extracted from a Kindle clippings file."""

    model_config = ConfigDict(frozen=True)

    title: str = Field(description="The title of the book")
    author: str = Field(description="The author of the book")
    content: str = Field(description="The highlighted passage")

    def to_dict(self) -> dict:
        """Convert the highlight to a plain dictionary for serialization."""
        return {"title": self.title, "author": self.author, "content": self.content}
