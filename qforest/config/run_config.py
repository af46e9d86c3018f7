# qforest/config/run_config.py
from __future__ import annotations

from typing import Annotated, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .defaults_config import RunDefaults
from .tree_type import TreeType

Quantile = Annotated[float, Field(gt=0.0, lt=1.0)]
VariableName = Annotated[str, Field(min_length=1)]


class RunConfiguration(BaseModel):
    """
    RunConfiguration（one per process invocation）

    语义：
      - 构造时全部为默认值
      - OptionScanner 逐字段写入（已完成类型转换 + 范围检查）
      - ConsistencyValidator 只读检查
      - 之后交给外部 engine，只读

    validate_assignment 保证任何写入都不会留下类型非法的字段。
    """

    model_config = ConfigDict(validate_assignment=True)

    # -------------------------
    # Files
    # -------------------------
    input_file: str = ""
    predict_file: str = ""
    case_weights_file: str = ""
    split_weights_file: str = ""

    # -------------------------
    # Variable names
    # -------------------------
    dependent_var_name: str = ""
    status_var_name: str = ""
    instrument_var_name: str = ""
    always_split_vars: List[VariableName] = Field(default_factory=list)

    # -------------------------
    # Forest parameters
    # -------------------------
    tree_type: TreeType = TreeType.QUANTILE
    quantiles: List[Quantile] = Field(default_factory=list)
    num_trees: int = Field(500, ge=1)
    mtry: int = Field(0, ge=0)  # 0 = auto
    target_partition_size: int = Field(0, ge=0)  # 0 = auto
    num_threads: int = Field(1, ge=1)
    fraction: float = Field(1.0, gt=0.0, le=1.0)
    seed: int = Field(0, ge=0)  # 0 = no seed

    # -------------------------
    # Flags
    # -------------------------
    sample_without_replacement: bool = False
    save_memory_mode: bool = False
    verbose: bool = False
    write_forest: bool = False
    predict_all: bool = False

    @classmethod
    def with_defaults(cls, defaults: Optional[RunDefaults] = None) -> "RunConfiguration":
        defaults = defaults or RunDefaults()
        return cls(
            num_trees=defaults.num_trees,
            num_threads=defaults.resolve_num_threads(),
        )

    @property
    def prediction_mode(self) -> bool:
        return bool(self.predict_file)

    @property
    def sample_with_replacement(self) -> bool:
        return not self.sample_without_replacement
