import subprocess
import sys

import anndata as ad
import pytest

from cerebro.cli import main

from conftest import make_adata


def test_cli_help():
    out = subprocess.run([sys.executable, "-m", "cerebro.cli", "-h"], capture_output=True, text=True)
    assert out.returncode == 0
    assert "usage" in out.stdout.lower()


def test_cli_writes_percentages(tmp_path, ref_dir, capsys):
    src = tmp_path / "in.h5ad"
    make_adata([[10, 10, 0], [0, 10, 10]], ["A", "B", "C"], ["c1", "c2"]).write_h5ad(src)

    main(["--h5ad", str(src), "--reference_dir", ref_dir, "--add_counts", "--summary"])

    out = ad.read_h5ad(tmp_path / "in_qc.h5ad")
    assert out.obs["percent_mt"].tolist() == [50.0, 0.0]
    assert out.obs["nUMI"].tolist() == [20.0, 20.0]
    assert '"n_genes": 3' in capsys.readouterr().out


def test_cli_reports_validation_errors(tmp_path, ref_dir):
    src = tmp_path / "in.h5ad"
    make_adata([[1, 2]], ["A", "B"]).write_h5ad(src)
    with pytest.raises(SystemExit, match="Assay slot `RNA`"):
        main(["--h5ad", str(src), "--reference_dir", ref_dir, "--assay", "RNA"])


def test_cli_exits_130_on_ctrl_c(tmp_path, ref_dir, monkeypatch):
    import cerebro.drivers

    def interrupted(**kwargs):
        raise KeyboardInterrupt

    monkeypatch.setattr(cerebro.drivers, "run_percent_mt_ribo", interrupted)
    src = tmp_path / "in.h5ad"
    make_adata([[1, 2]], ["A", "B"]).write_h5ad(src)
    with pytest.raises(SystemExit) as exc:
        main(["--h5ad", str(src), "--reference_dir", ref_dir])
    assert exc.value.code == 130
