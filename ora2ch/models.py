from pydantic import BaseModel, ConfigDict, Field


class ColumnRecord(BaseModel):
    """One column of one Oracle table, as listed in ALL_TAB_COLUMNS."""

    model_config = ConfigDict(frozen=True)

    owner: str
    table_name: str
    column_name: str
    data_type: str
    data_length: int = Field(default=0, ge=0)
    data_precision: int = Field(default=0, ge=0)
    nullable: bool = False


class TableDescriptor(BaseModel):
    model_config = ConfigDict(frozen=True)

    owner: str
    table_name: str
