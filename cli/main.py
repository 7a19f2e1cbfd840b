"""Command line entry point for densenn forward evaluation runs."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Iterable

import numpy as np

from densenn import pipelines


def _format_result(result) -> str:
    payload = {
        "loss": round(result.loss, 6),
        "accuracy": round(result.accuracy, 6),
        "output_shape": list(result.output_shape),
        "manifest": result.manifest_path,
    }
    if result.plot_paths:
        payload["plots"] = result.plot_paths
    return json.dumps(payload, sort_keys=True)


def parse_args(argv: Iterable[str] | None = None) -> argparse.Namespace:
    preset_names = sorted(pipelines.presets().keys())
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--preset",
        choices=preset_names,
        default="spiral_forward",
        help="Preset configuration to execute",
    )
    parser.add_argument(
        "--config", type=Path, help="Optional JSON/YAML config override"
    )
    parser.add_argument(
        "--dataset-path",
        type=Path,
        help="Spiral JSON file of {x, y, class} records (switches to spiral_json)",
    )
    parser.add_argument("--seed", type=int, help="Seed for data generation and weights")
    parser.add_argument(
        "--encoding",
        choices=["sparse", "one_hot"],
        help="Target encoding handed to the loss function",
    )
    parser.add_argument(
        "--preview-rows", type=int, help="Rows of each layer output to print"
    )
    parser.add_argument(
        "--enable-plots", action="store_true", help="Write SVG scatter plots"
    )
    parser.add_argument("--run-dir", type=Path, help="Directory for the manifest and plots")
    parser.add_argument(
        "--list-presets", action="store_true", help="List available presets and exit"
    )
    parser.add_argument(
        "--dump-config", type=Path, help="Dump the resolved config to a JSON file"
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )
    return parser.parse_args(argv)


def resolve_config(args: argparse.Namespace) -> dict:
    config = json.loads(json.dumps(pipelines.load_preset(args.preset)))

    if args.config:
        override = pipelines.read_config_file(args.config)
        if pipelines.REQUIRED_SECTIONS <= set(override.keys()):
            config = json.loads(json.dumps(override))
        else:
            config = pipelines.merge_config(config, override)

    if args.dataset_path:
        config["data"] = {"name": "spiral_json", "options": {"path": str(args.dataset_path)}}

    if args.seed is not None:
        config.setdefault("model", {})["seed"] = int(args.seed)
        if config.get("data", {}).get("name") == "spiral":
            config["data"].setdefault("options", {})["seed"] = int(args.seed)

    if args.encoding:
        config.setdefault("loss", {})["encoding"] = args.encoding

    report = config.setdefault("report", {})
    if args.preview_rows is not None:
        report["preview_rows"] = int(args.preview_rows)
    if args.enable_plots:
        report["enable_plots"] = True
    if args.run_dir:
        report["run_dir"] = str(args.run_dir)
    return config


def main(argv: Iterable[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.list_presets:
        for name in sorted(pipelines.presets().keys()):
            print(name)
        raise SystemExit(0)

    config = resolve_config(args)

    if args.dump_config:
        args.dump_config.parent.mkdir(parents=True, exist_ok=True)
        args.dump_config.write_text(json.dumps(config, indent=2))

    result = pipelines.run_pipeline(config, verbose=True)

    with np.printoptions(precision=8, suppress=True):
        for idx, preview in enumerate(result.previews):
            print(f"Layer {idx} output (first {preview.shape[0]} rows):")
            print(preview)
    print(_format_result(result))


if __name__ == "__main__":
    main()
