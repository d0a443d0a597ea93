from __future__ import annotations

from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, Field


class PrimitiveRefDTO(BaseModel):
    kind: Literal["primitive"]
    name: str
    size: Optional[int] = Field(default=None, ge=0)
    align: int = Field(default=0, ge=0)
    words: int = Field(default=0, ge=0)


class NamedRefDTO(BaseModel):
    kind: Literal["named"]
    name: str
    identity: Optional[str] = None


class PointerRefDTO(BaseModel):
    kind: Literal["pointer"]
    target: Optional[TypeRefDTO] = None
    name: str = ""


class ArrayRefDTO(BaseModel):
    kind: Literal["array"]
    elem: TypeRefDTO
    length: int = Field(ge=0)


TypeRefDTO = Annotated[
    Union[PrimitiveRefDTO, NamedRefDTO, PointerRefDTO, ArrayRefDTO],
    Field(discriminator="kind"),
]

PointerRefDTO.model_rebuild()
ArrayRefDTO.model_rebuild()


class FieldDTO(BaseModel):
    name: str = ""
    type: TypeRefDTO


class TypeDefDTO(BaseModel):
    name: str
    identity: Optional[str] = None
    fields: List[FieldDTO] = []


class PositionDTO(BaseModel):
    file: str
    line: int = Field(ge=0)
    column: int = Field(ge=0)


class ParamDTO(BaseModel):
    name: str = ""
    type: TypeRefDTO


class FunctionDTO(BaseModel):
    name: str
    position: PositionDTO
    receiver: Optional[ParamDTO] = None
    params: List[ParamDTO] = []
    results: List[ParamDTO] = []
    display: str = ""


class UnitDTO(BaseModel):
    name: str = ""
    types: List[TypeDefDTO] = []
    imported_types: List[TypeDefDTO] = []
    functions: List[FunctionDTO] = []


class GraphDocumentDTO(BaseModel):
    units: List[UnitDTO]


class CopySiteDTO(BaseModel):
    file: str
    line: int
    column: int
    function: str
    should_be: List[str]
    message: str


class CheckResponseDTO(BaseModel):
    sites: List[CopySiteDTO]
    count: int
