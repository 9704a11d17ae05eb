import re
from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Dict, List, Mapping


class ConfigError(ValueError):
    pass


class NodeSelectionPolicy(Enum):
    LOCAL = "LOCAL"
    RANDOM = "RANDOM"
    HYBRID = "HYBRID"


class GraphInitColorPolicy(Enum):
    ROUND_ROBIN = "ROUND_ROBIN"
    RANDOM = "RANDOM"
    BATCH = "BATCH"


# Options with a value supplied when the caller leaves them out.
DEFAULTS: Dict[str, Any] = {
    "restart": False,
    "restart_interval": 0,
    "enhanced": False,
    "temp_enh": 1.0,
    "min_temp_enh": 1e-5,
    "alpha_enh": 0.9,
    "iter_enh": 1,
}


def _snake(name: str) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "_", name).lower()


# camelCase spellings of the recognized options that do not map 1:1 onto a field name
ALIASES = {
    "graph_file": "graph_file_path",
    "rand_neighbors_sample_size": "random_neighbor_sample_size",
    "random_neighbors_sample_size": "random_neighbor_sample_size",
    "uniform_rand_sample_size": "uniform_random_sample_size",
    "graph_initial_color_policy": "init_color_policy",
}


def _parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        v = value.strip().lower()
        if v in ("1", "true", "yes", "on"):
            return True
        if v in ("0", "false", "no", "off", ""):
            return False
        raise ValueError(f"not a boolean: {value!r}")
    return bool(value)


def _parse_enum(enum_cls, value: Any):
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls[str(value).strip().upper()]
    except KeyError:
        names = ", ".join(m.name for m in enum_cls)
        raise ValueError(f"{value!r} is not one of {names}") from None


@dataclass(frozen=True)
class RunConfig:
    num_partitions: int
    rounds: int
    random_neighbor_sample_size: int
    temperature: float
    delta: float
    seed: int
    uniform_random_sample_size: int
    graph_file_path: str
    output_dir: str
    init_color_policy: GraphInitColorPolicy
    node_selection_policy: NodeSelectionPolicy
    alpha: float
    restart: bool = False
    restart_interval: int = 0
    enhanced: bool = False
    temp_enh: float = 1.0
    min_temp_enh: float = 1e-5
    alpha_enh: float = 0.9
    iter_enh: int = 1

    def __post_init__(self):
        problems = self._problems()
        if problems:
            raise ConfigError("invalid configuration: " + "; ".join(problems))

    def _problems(self) -> List[str]:
        p: List[str] = []
        if self.num_partitions < 1:
            p.append("numPartitions must be >= 1")
        if self.rounds < 0:
            p.append("rounds must be >= 0")
        if self.random_neighbor_sample_size < 1:
            p.append("randomNeighborSampleSize must be >= 1")
        if self.uniform_random_sample_size < 1:
            p.append("uniformRandomSampleSize must be >= 1")
        if self.temperature <= 0:
            p.append("temperature must be > 0")
        if self.delta < 0:
            p.append("delta must be >= 0")
        if self.alpha < 0:
            p.append("alpha must be >= 0")
        if self.iter_enh < 1:
            p.append("iterEnh must be >= 1")
        if not 0 < self.alpha_enh <= 1:
            p.append("alphaEnh must be in (0, 1]")
        if self.restart and self.restart_interval < 1:
            p.append("restartInterval must be >= 1 when restart is enabled")
        if self.enhanced and self.temp_enh <= 0:
            p.append("tempEnh must be > 0 when enhanced is enabled")
        if not isinstance(self.init_color_policy, GraphInitColorPolicy):
            p.append("initColorPolicy must be a GraphInitColorPolicy")
        if not isinstance(self.node_selection_policy, NodeSelectionPolicy):
            p.append("nodeSelectionPolicy must be a NodeSelectionPolicy")
        return p

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "RunConfig":
        """Build a validated config from camelCase or snake_case option names.

        Every missing required option is reported in a single ConfigError.
        """
        known = {f.name: f for f in fields(cls)}
        values: Dict[str, Any] = {}
        for key, value in raw.items():
            name = _snake(key)
            name = ALIASES.get(name, name)
            if name not in known:
                raise ConfigError(f"unknown option: {key}")
            if value is None:
                continue
            values[name] = value

        missing = [n for n in known if n not in values and n not in DEFAULTS]
        if missing:
            raise ConfigError("missing required option(s): " + ", ".join(missing))

        for name, default in DEFAULTS.items():
            values.setdefault(name, default)

        try:
            coerced = {
                "num_partitions": int(values["num_partitions"]),
                "rounds": int(values["rounds"]),
                "random_neighbor_sample_size": int(values["random_neighbor_sample_size"]),
                "temperature": float(values["temperature"]),
                "delta": float(values["delta"]),
                "seed": int(values["seed"]),
                "uniform_random_sample_size": int(values["uniform_random_sample_size"]),
                "graph_file_path": str(values["graph_file_path"]),
                "output_dir": str(values["output_dir"]),
                "init_color_policy": _parse_enum(GraphInitColorPolicy, values["init_color_policy"]),
                "node_selection_policy": _parse_enum(NodeSelectionPolicy, values["node_selection_policy"]),
                "alpha": float(values["alpha"]),
                "restart": _parse_bool(values["restart"]),
                "restart_interval": int(values["restart_interval"]),
                "enhanced": _parse_bool(values["enhanced"]),
                "temp_enh": float(values["temp_enh"]),
                "min_temp_enh": float(values["min_temp_enh"]),
                "alpha_enh": float(values["alpha_enh"]),
                "iter_enh": int(values["iter_enh"]),
            }
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"invalid option value: {exc}") from exc
        return cls(**coerced)
