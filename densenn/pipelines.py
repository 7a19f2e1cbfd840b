"""Pipeline assembly for densenn forward evaluation runs."""

from __future__ import annotations

import json
import logging
from copy import deepcopy
from pathlib import Path
from typing import Dict, Mapping

import numpy as np

from .core.network import Network
from .core.types import RunResult
from .data import registry
from .loss.function import LossFunction
from .loss.metrics import accuracy, predicted_classes
from .loss.targets import TargetEncoding
from .reporting.artifacts import write_manifest
from .reporting.plots import PlotAdapter

logger = logging.getLogger(__name__)

_SPIRAL_LAYERS = [
    {"neurons": 3, "fan_in": 2, "activation": "relu"},
    {"neurons": 3, "fan_in": 3, "activation": "softmax"},
]

_PRESETS: Dict[str, Mapping[str, object]] = {
    "spiral_forward": {
        "data": {
            "name": "spiral",
            "options": {"samples": 100, "classes": 3, "seed": 0},
        },
        "model": {"layers": _SPIRAL_LAYERS, "seed": 0},
        "loss": {"name": "cross_entropy", "encoding": "sparse"},
        "report": {
            "run_dir": "runs/spiral-forward",
            "enable_plots": False,
            "preview_rows": 5,
        },
    },
    "spiral_json_forward": {
        "data": {"name": "spiral_json", "options": {}},
        "model": {"layers": _SPIRAL_LAYERS, "seed": 0},
        "loss": {"name": "cross_entropy", "encoding": "one_hot"},
        "report": {
            "run_dir": "runs/spiral-json-forward",
            "enable_plots": False,
            "preview_rows": 5,
        },
    },
}

REQUIRED_SECTIONS = {"data", "model"}

_PRESET_DIR = Path(__file__).resolve().parents[1] / "configs" / "presets"
_FILE_PRESETS_CACHE: Dict[str, Mapping[str, object]] | None = None


def read_config_file(path: str | Path) -> Mapping[str, object]:
    """Decode a JSON or YAML config file into a mapping."""

    path = Path(path)
    text = path.read_text()
    suffix = path.suffix.lower()
    if suffix in {".yaml", ".yml"}:
        try:
            import yaml  # type: ignore
        except ImportError as exc:  # pragma: no cover - optional dependency
            raise RuntimeError("PyYAML is required to load YAML configs") from exc
        data = yaml.safe_load(text) or {}
    elif suffix == ".json":
        data = json.loads(text or "{}")
    else:
        raise ValueError(f"Unsupported config file type: {path.suffix}")

    if not isinstance(data, Mapping):
        raise TypeError(f"Config {path.name} must decode to a mapping")
    return data


def _file_presets() -> Dict[str, Mapping[str, object]]:
    global _FILE_PRESETS_CACHE
    if _FILE_PRESETS_CACHE is None:
        found: Dict[str, Mapping[str, object]] = {}
        if _PRESET_DIR.exists():
            for file in sorted(_PRESET_DIR.iterdir()):
                if file.suffix.lower() not in {".yaml", ".yml", ".json"}:
                    continue
                data = read_config_file(file)
                missing = REQUIRED_SECTIONS - set(data)
                if missing:
                    missing_str = ", ".join(sorted(missing))
                    raise KeyError(f"Preset {file.name} is missing required sections: {missing_str}")
                found[file.stem] = json.loads(json.dumps(data))
        _FILE_PRESETS_CACHE = found
    return {name: deepcopy(cfg) for name, cfg in _FILE_PRESETS_CACHE.items()}


def presets() -> Mapping[str, Mapping[str, object]]:
    combined: Dict[str, Mapping[str, object]] = {}
    combined.update({name: deepcopy(cfg) for name, cfg in _PRESETS.items()})
    combined.update(_file_presets())
    return combined


def load_preset(name: str) -> Mapping[str, object]:
    file_presets = _file_presets()
    if name in file_presets:
        return file_presets[name]
    try:
        return deepcopy(_PRESETS[name])
    except KeyError as exc:
        raise KeyError(f"Unknown preset: {name}") from exc


def merge_config(base: dict, override: Mapping[str, object]) -> dict:
    """Recursively merge ``override`` into ``base`` and return ``base``."""

    for key, value in override.items():
        if isinstance(value, Mapping) and isinstance(base.get(key), dict):
            base[key] = merge_config(dict(base[key]), value)
        else:
            base[key] = value
    return base


def build_network(model_cfg: Mapping[str, object]) -> Network:
    layers = model_cfg.get("layers")
    if not layers:
        raise KeyError("Model config must list at least one layer under 'layers'")
    seed = model_cfg.get("seed")
    return Network.from_config(layers, seed=None if seed is None else int(seed))


def _print_startup_summary(*, dataset_name: str, network: Network, loss: str, encoding: str) -> None:
    dims = [network.input_dim] + [layer.neurons for layer in network.layers]
    print("=== densenn forward run ===")
    print(f"Dataset       : {dataset_name}")
    print(f"Dimensions    : {dims}")
    print(f"Activations   : {[layer.activation.name for layer in network.layers]}")
    print(f"Loss          : {loss} ({encoding})")
    print(f"Parameters    : {network.parameter_count()}")
    print("===========================")


def run_pipeline(config: Mapping[str, object], *, verbose: bool = False) -> RunResult:
    """Load data, run the forward pass and score it."""

    missing = REQUIRED_SECTIONS - set(config)
    if missing:
        raise KeyError(f"Config is missing required sections: {', '.join(sorted(missing))}")

    data_cfg = config["data"]
    model_cfg = config["model"]
    loss_cfg = dict(config.get("loss", {}))
    report_cfg = dict(config.get("report", {}))

    dataset_name = str(data_cfg["name"])
    dataset = registry.get_dataset(dataset_name, **dict(data_cfg.get("options", {})))
    network = build_network(model_cfg)
    loss_fn = LossFunction.from_name(loss_cfg.get("name", "cross_entropy"))
    encoding = TargetEncoding(loss_cfg.get("encoding", TargetEncoding.SPARSE.value))

    if verbose:
        _print_startup_summary(
            dataset_name=dataset_name,
            network=network,
            loss=loss_fn.kind.value,
            encoding=encoding.value,
        )

    logger.info("Running %d-layer forward pass on %d examples", len(network.layers), len(dataset))
    outputs = network.forward_all(dataset.features)
    predictions = outputs[-1]
    targets = dataset.targets(encoding, num_classes=network.output_dim)
    loss = loss_fn.calculate(predictions, targets)
    acc = accuracy(predictions, targets)
    logger.info("loss=%.6f accuracy=%.4f", loss, acc)

    preview_rows = int(report_cfg.get("preview_rows", 5))
    previews = [output[:preview_rows].copy() for output in outputs]

    run_dir = Path(str(report_cfg.get("run_dir", "runs/densenn")))
    plotter = PlotAdapter(run_dir, enable_plots=bool(report_cfg.get("enable_plots", False)))
    plotter.scatter("spiral", dataset.features, dataset.labels, title="Spiral Data")
    plotter.scatter(
        "predictions", dataset.features, predicted_classes(predictions), title="Predicted Classes"
    )
    plot_paths = plotter.close()

    output_shape = (int(predictions.shape[0]), int(predictions.shape[1]))
    manifest_path = write_manifest(
        run_dir / "manifest.json",
        config=json.loads(json.dumps(config)),
        dataset_provenance=dataset.provenance,
        results={
            "loss": loss,
            "accuracy": acc,
            "output_shape": list(output_shape),
            "parameters": network.parameter_count(),
            "mean_confidence": float(np.mean(np.max(predictions, axis=1))) if len(dataset) else 0.0,
        },
    )

    return RunResult(
        loss=loss,
        accuracy=acc,
        output_shape=output_shape,
        previews=previews,
        manifest_path=manifest_path,
        plot_paths=dict(plot_paths),
    )


__all__ = [
    "build_network",
    "load_preset",
    "merge_config",
    "presets",
    "read_config_file",
    "run_pipeline",
]
