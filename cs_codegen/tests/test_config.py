from cs_codegen.config import GeneratorConfig


class TestGeneratorConfig:
    def test_defaults(self):
        config = GeneratorConfig()
        assert config.backing_field_prefix == "m_"
        assert config.properties_region == "Properties"
        assert config.add_generation_comment is True
        assert config.validate_output is True
        assert config.parse_indent == 0

    def test_from_dict_ignores_unknown_keys(self):
        config = GeneratorConfig.from_dict({"properties_region": "Props", "unknown": 1})
        assert config.properties_region == "Props"
        assert not hasattr(config, "unknown")

    def test_to_dict_roundtrip(self):
        config = GeneratorConfig(backing_field_prefix="_", parse_indent=1)
        assert GeneratorConfig.from_dict(config.to_dict()) == config
