"""
Pydantic models for the Open Library payloads consumed by the catalogue.

Only the fields the service maps into a ``Book`` are declared; everything
else in the upstream JSON is ignored.  Open Library is loose about shapes:
``description`` is either a plain string or a typed object such as
``{"type": "/type/text", "value": "..."}``, and ``authors`` on a work is a
list of nested references.  These models accept those variants as-is and
leave the resolution to ``normalizer``.
"""

from typing import Any, List, Optional, Union

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field
from typing_extensions import Annotated


class DescriptionValue(BaseModel):
    """The object form of a description (``{"type": ..., "value": ...}``)."""

    model_config = ConfigDict(extra="ignore")

    type: Optional[str] = None
    value: Any = None


def _coerce_description(raw: Any) -> Any:
    # Anything that is neither text nor an object degrades to "no description".
    if isinstance(raw, (str, dict, DescriptionValue)):
        return raw
    return None


Description = Annotated[
    Optional[Union[str, DescriptionValue]], BeforeValidator(_coerce_description)
]

# Open Library sends explicit nulls for fields it has no value for.
Text = Annotated[str, BeforeValidator(lambda v: "" if v is None else v)]
Items = Annotated[List[Any], BeforeValidator(lambda v: [] if v is None else v)]


class SearchDoc(BaseModel):
    """One entry of ``docs`` in ``/search.json``."""

    model_config = ConfigDict(extra="ignore")

    key: Text = ""
    title: Text = ""
    author_name: Items = Field(default_factory=list)
    first_publish_year: Optional[int] = None
    description: Description = None


class SearchResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    docs: Optional[List[SearchDoc]] = None
    num_found: Optional[int] = Field(default=None, alias="numFound")


class WorkDetail(BaseModel):
    """Body of ``/works/{id}.json``."""

    model_config = ConfigDict(extra="ignore")

    title: Text = ""
    authors: Items = Field(default_factory=list)
    description: Description = None
    first_publish_date: Optional[str] = None


class AuthorDetail(BaseModel):
    """Body of ``/authors/{id}.json``."""

    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None
    personal_name: Optional[str] = None

    @property
    def display_name(self) -> Optional[str]:
        return self.name or self.personal_name
