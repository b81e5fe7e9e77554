"""Tabular Response Model.

Every upstream endpoint returns the same rendering-oriented structure:
regions -> rows -> cells, each cell holding text fragments plus an optional
entity link, image and coordinates. The validators below only coerce the
wire format (strings vs lists, int vs str ids, optional `data` envelope);
they never interpret meaning.

Validation is lenient below the response level. A malformed region, row or
tab is logged and dropped, and a malformed image, link or coordinates value
is dropped from its cell, so one drifted row never hides its siblings.
"""

from typing import Any, Dict, List, Optional, Type, TypeVar

from loguru import logger
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator, model_validator

M = TypeVar("M", bound=BaseModel)


def _as_text_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value if item is not None]
    return [str(value)]


def _validate_or_none(model: Type[M], value: Any) -> Optional[M]:
    if value is None:
        return None
    try:
        return model.model_validate(value)
    except ValidationError:
        return None


def _validate_each(model: Type[M], values: Any, entity: str) -> List[M]:
    """Validates list items one by one, logging and dropping the invalid ones."""
    if values is None:
        return []
    if not isinstance(values, (list, tuple)):
        logger.warning(f"Expected a list of {entity}s, got {type(values).__name__}; ignoring it")
        return []
    valid: List[M] = []
    for index, value in enumerate(values):
        try:
            valid.append(model.model_validate(value))
        except ValidationError as e:
            logger.warning(f"Skipping malformed {entity} at index {index}: {e.error_count()} error(s)")
    return valid


def _coordinates(lat: Any, lng: Any) -> Optional[Dict[str, float]]:
    try:
        return {"lat": float(lat), "lng": float(lng)}
    except (TypeError, ValueError):
        return None


class EntityLink(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Optional[str] = None
    ids: List[str] = []
    url: Optional[str] = None

    @field_validator("ids", mode="before")
    @classmethod
    def _coerce_ids(cls, value: Any) -> List[str]:
        if value is None:
            return []
        if not isinstance(value, (list, tuple)):
            value = [value]
        return [str(item) for item in value if item is not None and str(item) != ""]

    @property
    def primary_id(self) -> Optional[str]:
        return self.ids[0] if self.ids else None


class CellImage(BaseModel):
    model_config = ConfigDict(frozen=True)

    url: str


class Coordinates(BaseModel):
    model_config = ConfigDict(frozen=True)

    lat: float
    lng: float


class Cell(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: List[str] = []
    link: Optional[EntityLink] = None
    image: Optional[CellImage] = None
    coordinates: Optional[Coordinates] = None

    @field_validator("text", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> List[str]:
        return _as_text_list(value)

    @model_validator(mode="before")
    @classmethod
    def _sanitize(cls, data: Any) -> Any:
        if isinstance(data, Cell):
            return data
        if not isinstance(data, dict):
            # A bare string or list is a text-only cell
            return {"text": data} if isinstance(data, (str, list, tuple)) else {}
        data = dict(data)

        image = data.get("image")
        if isinstance(image, str):
            image = {"url": image}
        if isinstance(image, dict) and image.get("url"):
            data["image"] = {"url": str(image["url"])}
        else:
            data["image"] = None

        link = data.get("link")
        data["link"] = _validate_or_none(EntityLink, link)

        coordinates = data.get("coordinates")
        if isinstance(coordinates, dict):
            data["coordinates"] = _coordinates(coordinates.get("lat"), coordinates.get("lng"))
        else:
            data["coordinates"] = None
        # Location cells carry their position as a map link with x/y
        if data["coordinates"] is None and isinstance(link, dict) and link.get("type") == "map":
            data["coordinates"] = _coordinates(link.get("y"), link.get("x"))
        return data


class Row(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: Optional[str] = None
    link: Optional[EntityLink] = None
    cells: List[Cell] = []

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Optional[str]:
        if value is None or value == "":
            return None
        return str(value)

    @field_validator("link", mode="before")
    @classmethod
    def _drop_malformed_link(cls, value: Any) -> Optional[EntityLink]:
        return _validate_or_none(EntityLink, value)

    @field_validator("cells", mode="before")
    @classmethod
    def _coerce_cells(cls, value: Any) -> List[Cell]:
        # Positions matter to the layout resolvers, so a broken cell stays as an empty one
        if not isinstance(value, (list, tuple)):
            return []
        return [_validate_or_none(Cell, cell) or Cell() for cell in value]


class Region(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str = ""
    rows: List[Row] = []

    @model_validator(mode="before")
    @classmethod
    def _label_from_text(cls, data: Any) -> Any:
        # Upstream names the region label "text"
        if isinstance(data, dict) and "label" not in data and "text" in data:
            text = data.get("text")
            label = " ".join(_as_text_list(text)) if text is not None else ""
            return {**data, "label": label}
        return data

    @field_validator("label", mode="before")
    @classmethod
    def _coerce_label(cls, value: Any) -> str:
        return " ".join(_as_text_list(value))

    @field_validator("rows", mode="before")
    @classmethod
    def _validate_rows(cls, value: Any) -> List[Row]:
        return _validate_each(Row, value, "row")


class Tab(BaseModel):
    """A selectable sub-table; its context identifies league/class/group."""

    model_config = ConfigDict(frozen=True)

    text: str = ""
    context: Dict[str, Any] = {}

    @model_validator(mode="before")
    @classmethod
    def _context_from_link(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        if "context" not in data:
            link = data.get("link")
            if isinstance(link, dict) and isinstance(link.get("set"), dict):
                data = {**data, "context": link["set"]}
        return data

    @field_validator("text", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        return " ".join(_as_text_list(value))

    @field_validator("context", mode="before")
    @classmethod
    def _coerce_context(cls, value: Any) -> Dict[str, Any]:
        return value if isinstance(value, dict) else {}


class TabularResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str = ""
    subtitle: str = ""
    context: Dict[str, Any] = {}
    headers: List[str] = []
    tabs: List[Tab] = []
    regions: List[Region] = []

    @field_validator("title", "subtitle", mode="before")
    @classmethod
    def _coerce_title(cls, value: Any) -> str:
        return " ".join(_as_text_list(value))

    @field_validator("context", mode="before")
    @classmethod
    def _coerce_context(cls, value: Any) -> Dict[str, Any]:
        return value if isinstance(value, dict) else {}

    @field_validator("headers", mode="before")
    @classmethod
    def _coerce_headers(cls, value: Any) -> List[str]:
        headers: List[str] = []
        if not isinstance(value, (list, tuple)):
            return headers
        for header in value:
            if isinstance(header, dict):
                header = " ".join(_as_text_list(header.get("text")))
            headers.append(str(header) if header is not None else "")
        return headers

    @field_validator("tabs", mode="before")
    @classmethod
    def _validate_tabs(cls, value: Any) -> List[Tab]:
        return _validate_each(Tab, value, "tab")

    @field_validator("regions", mode="before")
    @classmethod
    def _validate_regions(cls, value: Any) -> List[Region]:
        return _validate_each(Region, value, "region")

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "TabularResponse":
        """Builds the model from a raw JSON body, unwrapping the `data` envelope."""
        body = payload.get("data") if isinstance(payload.get("data"), dict) else payload
        return cls.model_validate(body)

    @property
    def rows(self) -> List[Row]:
        """All rows of all regions, in upstream order."""
        return [row for region in self.regions for row in region.rows]

    def context_value(self, key: str) -> Optional[str]:
        value = self.context.get(key)
        if value is None or value == "":
            return None
        return str(value)
