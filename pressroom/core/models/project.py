"""
Project and project configuration models.

``Project`` is owned by the project registry — pressroom only reads its
``repo`` and ``branch``. ``ProjectConfig`` is the JSON document stored
inside the repository itself and is always re-read from there.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Project(BaseModel):
    """A registered project pointing at one repository."""

    id: int = 0
    user: str
    title: str
    repo: str                       # "owner/name"
    branch: str = ""                # empty = repository default branch


class FieldConfig(BaseModel):
    """One editable field of a template."""

    model_config = ConfigDict(extra="allow")

    name: str
    field: str = "text"
    default: str | int | float | bool = ""
    hidden: bool = False


class ProjectTemplate(BaseModel):
    """A named set of fields applied to documents of a collection."""

    model_config = ConfigDict(extra="allow")

    id: str
    name: str
    fields: list[FieldConfig] = Field(default_factory=list)


class ProjectCollection(BaseModel):
    """A folder-scoped collection declared in the config document.

    ``route`` is a repo-relative directory used verbatim to filter the
    tree. Overlapping routes are allowed and yield overlapping members.
    """

    model_config = ConfigDict(extra="allow")

    id: str
    name: str
    route: str
    template: str = ""


class ProjectConfig(BaseModel):
    """The ``pressroom.config.json`` document.

    JSON keys keep their on-disk camelCase spelling (``mediaFolder``);
    Python code uses ``media_folder``.
    Keys this model does not know are kept and written back unchanged.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    media_folder: str | None = Field(default=None, alias="mediaFolder")
    collections: list[ProjectCollection] = Field(default_factory=list)
    templates: list[ProjectTemplate] = Field(default_factory=list)

    def get_collection(self, collection_id: str) -> ProjectCollection | None:
        """Look up a collection by id."""
        for collection in self.collections:
            if collection.id == collection_id:
                return collection
        return None

    def get_template(self, template_id: str) -> ProjectTemplate | None:
        """Look up a template by id."""
        for template in self.templates:
            if template.id == template_id:
                return template
        return None

    def to_document(self) -> dict:
        """Serialize to the on-disk JSON shape."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
