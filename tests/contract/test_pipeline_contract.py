import json
from pathlib import Path

import numpy as np
import pytest

from densenn import pipelines


def _config(tmp_path, preset="spiral_forward", **report):
    config = pipelines.load_preset(preset)
    config["report"].update({"run_dir": str(tmp_path / "run"), **report})
    return config


def test_pipeline_produces_manifest(tmp_path):
    result = pipelines.run_pipeline(_config(tmp_path))
    assert result.output_shape == (300, 3)
    assert len(result.previews) == 2
    assert all(p.shape == (5, 3) for p in result.previews)
    assert result.loss == pytest.approx(np.log(3), abs=0.01)
    assert 0.0 <= result.accuracy <= 1.0

    manifest = json.loads(Path(result.manifest_path).read_text())
    assert manifest["dataset"]["type"] == "synthetic"
    assert manifest["results"]["output_shape"] == [300, 3]
    assert manifest["results"]["loss"] == pytest.approx(result.loss)
    assert manifest["config"]["model"]["layers"][0]["neurons"] == 3


def test_pipeline_determinism(tmp_path):
    first = pipelines.run_pipeline(_config(tmp_path / "a"))
    second = pipelines.run_pipeline(_config(tmp_path / "b"))
    assert first.loss == second.loss
    np.testing.assert_array_equal(first.previews[-1], second.previews[-1])


def test_encodings_agree_through_pipeline(tmp_path):
    sparse_cfg = _config(tmp_path / "sparse")
    onehot_cfg = _config(tmp_path / "onehot")
    onehot_cfg["loss"]["encoding"] = "one_hot"
    sparse = pipelines.run_pipeline(sparse_cfg)
    onehot = pipelines.run_pipeline(onehot_cfg)
    assert onehot.loss == pytest.approx(sparse.loss)


def test_json_preset_runs_on_fixture(tmp_path):
    result = pipelines.run_pipeline(_config(tmp_path, "spiral_json_forward"))
    assert result.output_shape == (12, 3)


def test_pipeline_plots(tmp_path):
    result = pipelines.run_pipeline(_config(tmp_path, enable_plots=True))
    assert set(result.plot_paths) == {"spiral", "predictions"}
    assert all(Path(p).exists() for p in result.plot_paths.values())


def test_pipeline_rejects_incomplete_config():
    with pytest.raises(KeyError, match="model"):
        pipelines.run_pipeline({"data": {"name": "spiral"}})


def test_file_presets_are_listed():
    names = set(pipelines.presets())
    assert {"spiral_forward", "spiral_json_forward"} <= names
    with pytest.raises(KeyError, match="Unknown preset"):
        pipelines.load_preset("does-not-exist")


def test_merge_config_is_recursive():
    base = {"model": {"seed": 0, "layers": []}, "loss": {"name": "cross_entropy"}}
    merged = pipelines.merge_config(base, {"model": {"seed": 5}})
    assert merged["model"] == {"seed": 5, "layers": []}


def _json_config(tmp_path, records):
    path = tmp_path / "records.json"
    path.write_text(json.dumps({"data": records}))
    config = _config(tmp_path, "spiral_json_forward")
    config["data"]["options"] = {"path": str(path)}
    return config


def test_one_hot_targets_match_network_width(tmp_path):
    records = [
        {"x": 0.1, "y": 0.2, "class": 0},
        {"x": -0.3, "y": 0.4, "class": 1},
        {"x": 0.5, "y": -0.6, "class": 1},
    ]
    result = pipelines.run_pipeline(_json_config(tmp_path, records))
    assert result.output_shape == (3, 3)
    assert np.isfinite(result.loss)


def test_empty_json_dataset_scores_zero(tmp_path):
    result = pipelines.run_pipeline(_json_config(tmp_path, []))
    assert result.output_shape == (0, 3)
    assert result.loss == 0.0
    assert result.accuracy == 0.0
    manifest = json.loads(Path(result.manifest_path).read_text())
    assert manifest["results"]["mean_confidence"] == 0.0
