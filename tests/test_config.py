"""SplineConfig validation and its effect on spline behaviour."""

import pytest

from scene_splines import (
    SplineConfig,
    create_spline,
    evaluate,
    get_default_config,
    insert_entry,
    set_default_config,
)
from scene_splines.config import MAX_TERMS
from scene_splines.exceptions import ConfigurationError, DimensionMismatch, SplineNotFinalized


class TestSplineConfig:
    """Construction and validation."""

    def test_defaults(self):
        config = SplineConfig()

        assert config.max_terms == MAX_TERMS == 5
        assert config.lazy_finalize is True
        assert config.clamp_shapes is True
        assert config.extrapolate is True

    def test_from_dict(self):
        config = SplineConfig.from_dict({"max_terms": 3, "extrapolate": False})

        assert config.max_terms == 3
        assert config.extrapolate is False
        assert config.to_dict() == {"max_terms": 3, "lazy_finalize": True,
                                    "clamp_shapes": True, "extrapolate": False}

    def test_from_dict_rejects_unknown_keys(self):
        with pytest.raises(ConfigurationError) as excinfo:
            SplineConfig.from_dict({"tension": 0.5})

        assert excinfo.value.config_key == "tension"

    @pytest.mark.parametrize("values", [
        {"max_terms": 0},
        {"max_terms": 6},
        {"max_terms": 2.5},
        {"max_terms": True},
        {"lazy_finalize": "yes"},
    ])
    def test_invalid_values(self, values):
        with pytest.raises(ConfigurationError):
            SplineConfig.from_dict(values)

    def test_error_code(self):
        with pytest.raises(ConfigurationError) as excinfo:
            SplineConfig(max_terms=9).validate()

        assert str(excinfo.value).startswith("[SS_CONFIG]")


class TestConfigEffects:
    """Switches that change how splines behave."""

    def test_max_terms_limits_width(self):
        spline = create_spline("linear_spline", SplineConfig(max_terms=3))
        insert_entry(spline, 0.0, [1.0, 2.0, 3.0])

        with pytest.raises(DimensionMismatch):
            insert_entry(create_spline("linear_spline", SplineConfig(max_terms=3)),
                         0.0, [1.0, 2.0, 3.0, 4.0])

    def test_eager_finalize_required_without_lazy(self):
        spline = create_spline("linear_spline", SplineConfig(lazy_finalize=False))
        insert_entry(spline, 0.0, [0.0])
        insert_entry(spline, 1.0, [1.0])

        with pytest.raises(SplineNotFinalized):
            evaluate(spline, 0.5)

        spline.finalize()
        assert evaluate(spline, 0.5)[0][0] == pytest.approx(0.5)

    def test_default_config_applies_to_new_splines(self):
        custom = SplineConfig(extrapolate=False)
        set_default_config(custom)

        spline = create_spline("quadratic_spline")

        assert get_default_config() is custom
        assert spline.config is custom
        for x in range(3):
            insert_entry(spline, float(x), [float(x * x)])
        assert evaluate(spline, 5.0)[0][0] == pytest.approx(4.0)

    def test_reset_default_config(self):
        set_default_config(SplineConfig(max_terms=2))

        set_default_config(None)

        assert get_default_config() == SplineConfig()

    @pytest.mark.parametrize("config", [
        SplineConfig(max_terms=7),
        SplineConfig(lazy_finalize="no"),
        SplineConfig(clamp_shapes=1),
    ])
    def test_direct_config_is_validated(self, config):
        with pytest.raises(ConfigurationError):
            create_spline("linear_spline", config)

    def test_wide_values_rejected_with_default_limit(self):
        spline = create_spline("linear_spline", SplineConfig())

        with pytest.raises(DimensionMismatch):
            insert_entry(spline, 0.0, [0.0] * 6)

    def test_set_default_config_validates(self):
        with pytest.raises(ConfigurationError):
            set_default_config(SplineConfig(max_terms=0))
