from datetime import date

import pytest
import yaml
from pydantic import ValidationError

from battery_model.io.config import apply_overrides, load_config

CONFIG = """
battery:
  size: 13.5
  recharge: 90
  discharge: 5
years: [2021, 2022]
cost:
  - start: 2021-01-01
    daily: 105.6
    kwh: 28.05
    feed_in: 7.0
  - start: "2022-07-01"
    daily: 110.2
    kwh: 30.8
    feed_in: 5.2
"""


def test_load_config(tmp_path):
    p = tmp_path / "costs.yml"
    p.write_text(CONFIG, encoding="utf-8")
    cfg = load_config(p)

    assert cfg.battery.size == 13.5
    assert abs(cfg.battery.efficiency - 0.9) < 1e-12
    assert cfg.battery.initial_charge is None
    assert cfg.years == [2021, 2022]
    assert cfg.cost[0].start == date(2021, 1, 1)
    assert cfg.cost[1].start == date(2022, 7, 1)
    assert cfg.cost[1].feed_in == 5.2
    # defaults
    assert cfg.max_interval_minutes == 10
    assert cfg.tariff_lookup == "dated"
    assert cfg.clamp_overcharge is False


def test_blank_start_means_always(tmp_path):
    p = tmp_path / "costs.yml"
    p.write_text(
        "battery: {size: 5, recharge: 95, discharge: 2.5}\ncost:\n  - start: ''\n    kwh: 20\n",
        encoding="utf-8",
    )
    cfg = load_config(p)
    assert cfg.cost[0].start is None
    assert cfg.cost[0].daily == 0.0


def test_missing_cost_periods_rejected(tmp_path):
    p = tmp_path / "costs.yml"
    p.write_text("battery: {size: 5, recharge: 95, discharge: 2.5}\ncost: []\n", encoding="utf-8")
    with pytest.raises(ValidationError):
        load_config(p)


def test_bad_efficiency_rejected(tmp_path):
    p = tmp_path / "costs.yml"
    p.write_text("battery: {size: 5, recharge: 120, discharge: 2.5}\ncost: [{kwh: 20}]\n", encoding="utf-8")
    with pytest.raises(ValidationError):
        load_config(p)


def test_unreadable_or_malformed_config(tmp_path):
    with pytest.raises(OSError):
        load_config(tmp_path / "nope.yml")

    p = tmp_path / "bad.yml"
    p.write_text("battery: [size: 5\n", encoding="utf-8")
    with pytest.raises(yaml.YAMLError):
        load_config(p)

    p.write_text("- 1\n- 2\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(p)


def test_overrides_are_validated(tmp_path):
    p = tmp_path / "costs.yml"
    p.write_text(CONFIG, encoding="utf-8")
    cfg = load_config(p)

    out = apply_overrides(cfg, max_interval_minutes=15, clamp_overcharge=True, tariff_lookup=None)
    assert out.max_interval_minutes == 15
    assert out.clamp_overcharge is True
    assert out.tariff_lookup == "dated"
    assert out.cost[1].start == date(2022, 7, 1)
    assert apply_overrides(cfg) is cfg

    for bad in (0, -5):
        with pytest.raises(ValidationError):
            apply_overrides(cfg, max_interval_minutes=bad)
    with pytest.raises(ValidationError):
        apply_overrides(cfg, tariff_lookup="latest")
