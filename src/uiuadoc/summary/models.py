"""Presentation model consumed by the site renderer."""

from enum import Enum
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, Field

from ..extraction.models import DocumentationItem


class SectionType(str, Enum):
    """Kinds of summary sections."""

    DOCUMENTATION = "documentation"
    MODULES = "modules"
    BINDINGS = "bindings"


class ItemLink(BaseModel):
    """A table-of-contents entry."""

    title: str
    url: str


class RenderedDocumentation(BaseModel):
    """Prose documentation already converted to HTML."""

    type: Literal["documentation"] = "documentation"
    html: str


class ItemGroup(BaseModel):
    """A titled group of documentation items with a stable anchor."""

    type: Literal["items"] = "items"
    title: str
    anchor_id: str
    items: List[DocumentationItem] = Field(default_factory=list)


RenderingContent = Annotated[Union[RenderedDocumentation, ItemGroup], Field(discriminator="type")]


class RenderingItem(BaseModel):
    """One renderable block of a section."""

    links: List[ItemLink] = Field(default_factory=list)
    content: RenderingContent


class DocumentationSection(BaseModel):
    """A titled section of the documentation page."""

    title: str
    section_type: SectionType
    content: List[RenderingItem] = Field(default_factory=list)

    @property
    def links(self) -> List[ItemLink]:
        """Navigation links: explicit links first, then item group anchors."""
        links = [link for item in self.content for link in item.links]
        links.extend(
            ItemLink(title=item.content.title, url=f"#{item.content.anchor_id}")
            for item in self.content
            if isinstance(item.content, ItemGroup)
        )
        return links


class DocumentationSummary(BaseModel):
    """Everything a renderer needs to build the reference page."""

    title: str
    sections: List[DocumentationSection] = Field(default_factory=list)

    def get_section(self, section_type: SectionType) -> Optional[DocumentationSection]:
        for section in self.sections:
            if section.section_type == section_type:
                return section
        return None
