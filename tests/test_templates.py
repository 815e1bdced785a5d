import pytest

from beam_statics.engine.analysis import analyze_beam
from beam_statics.services.templates import TEMPLATES, categories, get_template, templates_by_category


@pytest.mark.parametrize("tpl", TEMPLATES, ids=[t.id for t in TEMPLATES])
def test_template_matches_expected_values(tpl):
    res = analyze_beam(tpl.beam)
    assert res.validation.is_valid, res.validation.messages
    assert abs(res.max_moment.value) == pytest.approx(tpl.expected_max_moment, rel=0.02)
    assert abs(res.max_shear.value) == pytest.approx(tpl.expected_max_shear, rel=0.02)


def test_catalogue():
    assert categories() == ["Simply Supported", "Cantilever"]
    assert len(templates_by_category("Simply Supported")) == 6
    assert len(templates_by_category("Cantilever")) == 4
    assert len({t.id for t in TEMPLATES}) == len(TEMPLATES)


def test_get_template():
    assert get_template("cant-udl").beam.supports[0].type == "fixed"
    assert get_template("nope") is None
