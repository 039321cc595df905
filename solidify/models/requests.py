"""API request models."""

from pydantic import BaseModel, Field


class ScanRequest(BaseModel):
    """Request to scan a file or directory on the server."""

    path: str = Field(
        ...,
        min_length=1,
        description="File or directory to scan, as seen by the server",
        examples=["src/MyApp"],
    )
    explain: bool = Field(default=False, description="Ask the LLM to explain each violation")
