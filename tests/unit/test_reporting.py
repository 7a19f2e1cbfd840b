import json

import numpy as np

from densenn.reporting.artifacts import write_manifest
from densenn.reporting.plots import PlotAdapter


def test_plot_adapter_headless(tmp_path):
    adapter = PlotAdapter(tmp_path, enable_plots=True)
    features = np.array([[0.0, 0.1], [0.5, -0.5], [-0.3, 0.2]])
    adapter.scatter("spiral", features, np.array([0, 1, 2]), title="Spiral Data")
    paths = adapter.close()
    assert (tmp_path / "spiral.svg").exists()
    assert paths == {"spiral": str(tmp_path / "spiral.svg")}
    assert "<svg" in (tmp_path / "spiral.svg").read_text()


def test_plot_adapter_disabled_writes_nothing(tmp_path):
    run_dir = tmp_path / "run"
    adapter = PlotAdapter(run_dir, enable_plots=False)
    adapter.scatter("spiral", np.zeros((2, 2)), np.zeros(2))
    assert adapter.close() == {}
    assert not run_dir.exists()


def test_manifest_serialises_numpy_values(tmp_path):
    path = write_manifest(
        tmp_path / "nested" / "manifest.json",
        config={"model": {"seed": 0}},
        dataset_provenance={"type": "synthetic"},
        results={"loss": np.float64(1.1), "shape": np.array([3, 3])},
    )
    manifest = json.loads(open(path).read())
    assert manifest["results"] == {"loss": 1.1, "shape": [3, 3]}
    assert manifest["dataset"]["type"] == "synthetic"
    assert "generated_at" in manifest
