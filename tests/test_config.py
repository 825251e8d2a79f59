import json
import logging

from dicing_toolkit.core import config
from dicing_toolkit.core.config import load_recipe_defaults, DEFAULT_RECIPE


def test_load_recipe_defaults_from_assets():
    recipe = load_recipe_defaults()
    with open(config.RECIPE_DEFAULTS_PATH, 'r') as f:
        expected = json.load(f)
    for key, value in expected.items():
        assert recipe[key] == value
    assert set(recipe) == set(DEFAULT_RECIPE)


def test_load_recipe_defaults_missing_file(tmp_path, caplog):
    with caplog.at_level(logging.WARNING):
        recipe = load_recipe_defaults(tmp_path / "nope.json")
    assert recipe == DEFAULT_RECIPE
    assert "Using built-in recipe" in caplog.text


def test_load_recipe_defaults_corrupt_file(tmp_path):
    path = tmp_path / "recipe.json"
    path.write_text("{not json")
    assert load_recipe_defaults(path) == DEFAULT_RECIPE


def test_load_recipe_defaults_not_an_object(tmp_path):
    path = tmp_path / "recipe.json"
    path.write_text("[1, 2]")
    assert load_recipe_defaults(path) == DEFAULT_RECIPE


def test_load_recipe_defaults_partial_override(tmp_path, caplog):
    path = tmp_path / "recipe.json"
    path.write_text(json.dumps({"material": "SiC", "rpm": 25000, "operator": "night shift"}))
    with caplog.at_level(logging.WARNING):
        recipe = load_recipe_defaults(path)
    assert recipe["material"] == "SiC"
    assert recipe["rpm"] == 25000
    assert recipe["wafer_diameter_mm"] == DEFAULT_RECIPE["wafer_diameter_mm"]
    assert "operator" not in recipe
    assert "operator" in caplog.text


def test_default_recipe_is_not_mutated(tmp_path):
    path = tmp_path / "recipe.json"
    path.write_text(json.dumps({"rpm": 1}))
    load_recipe_defaults(path)
    assert DEFAULT_RECIPE["rpm"] == 30000
