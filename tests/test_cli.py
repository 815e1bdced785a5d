import os
import tempfile

import pytest
from click.testing import CliRunner

from beam_statics.cli import main
from beam_statics.domain.beam import Beam, Support
from beam_statics.domain.loads import PointLoad
from beam_statics.services.logging_setup import reset_logging
from beam_statics.services.serialization import save_beam_json


@pytest.fixture(autouse=True)
def _fresh_logging():
    # el StreamHandler captura el stderr de CliRunner; no dejarlo vivo
    yield
    reset_logging()


def _write_beam(td, supports=None):
    beam = Beam(
        length=10.0,
        supports=supports or [Support("s1", 0.0, "pin"), Support("s2", 10.0, "roller")],
        loads=[PointLoad("p", 5.0, 20.0)],
    )
    path = os.path.join(td, "beam.json")
    save_beam_json(beam, path)
    return path


def test_analyze_prints_reactions_and_writes_outputs():
    runner = CliRunner()
    with tempfile.TemporaryDirectory() as td:
        path = _write_beam(td)
        csv_dir = os.path.join(td, "csv")
        pdf = os.path.join(td, "out.pdf")
        res = runner.invoke(main, ["analyze", path, "--csv", csv_dir, "--pdf", pdf, "--steps"])
        assert res.exit_code == 0, res.output
        assert "s1 @ x=0: V=10 kN" in res.output
        assert "Validation: OK" in res.output
        assert "Step 3:" in res.output
        assert len(os.listdir(csv_dir)) == 4
        assert os.path.getsize(pdf) > 0


def test_analyze_reports_configuration_error():
    runner = CliRunner()
    with tempfile.TemporaryDirectory() as td:
        path = _write_beam(td, supports=[Support("s1", 0.0, "pin")])
        res = runner.invoke(main, ["analyze", path])
        assert res.exit_code == 1
        assert "Error:" in res.output


def test_templates_listing_and_template_run():
    runner = CliRunner()
    res = runner.invoke(main, ["templates"])
    assert res.exit_code == 0
    assert "ss-central-point" in res.output
    assert "10 template(s)" in res.output

    res = runner.invoke(main, ["template", "cant-end-point"])
    assert res.exit_code == 0, res.output
    assert "M=120 kN·m" in res.output


def test_template_save_and_unknown():
    runner = CliRunner()
    with tempfile.TemporaryDirectory() as td:
        out = os.path.join(td, "t.json")
        res = runner.invoke(main, ["template", "ss-udl", "-o", out])
        assert res.exit_code == 0
        assert os.path.exists(out)
    res = runner.invoke(main, ["template", "nope"])
    assert res.exit_code == 1


def test_analyze_reports_unknown_units():
    runner = CliRunner()
    with tempfile.TemporaryDirectory() as td:
        beam = Beam(length=4.0, supports=[Support("s1", 0.0, "fixed")], units="SI")
        path = os.path.join(td, "si.json")
        save_beam_json(beam, path)
        res = runner.invoke(main, ["analyze", path])
        assert res.exit_code == 1
        assert "Error:" in res.output
        assert "SI" in res.output
