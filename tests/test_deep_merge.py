from flipbook.config.schema import deep_merge_dicts


def test_deep_merge_nested_and_scalar_replace() -> None:
    base = {
        "render": {"scale": 2.0, "default_aspect_ratio": 1.4},
        "assets": {"cover": "a.jpg"},
    }
    override = {
        "render": {"scale": 1.0},
        "assets": "none",
    }
    merged = deep_merge_dicts(base, override)
    assert merged == {"render": {"scale": 1.0, "default_aspect_ratio": 1.4}, "assets": "none"}
    # ensure original not mutated
    assert base["render"] == {"scale": 2.0, "default_aspect_ratio": 1.4}
