"""
Unit tests for configuration parsing.
Tests YAML configuration file parsing and error handling for missing fields.
"""

import pytest
import tempfile
import os
from config.parser import ConsoleConfig, ConfigurationError
from models import Language


def valid_config_dict():
    return {
        'server': {
            'listen_address': '127.0.0.1',
            'port': 8080
        },
        'console': {
            'language': 'fallback',
            'cache_size': 16
        },
        'history': {
            'symbol_threshold': 40
        }
    }


class TestConsoleConfigParsing:
    """Test console configuration parsing."""
    
    def test_valid_console_config(self):
        """Test parsing a valid console configuration."""
        config = ConsoleConfig(valid_config_dict())
        
        assert config.listen_address == '127.0.0.1'
        assert config.port == 8080
        assert config.language == Language.FALLBACK
        assert config.cache_size == 16
        assert config.symbol_threshold == 40
    
    def test_optional_fields_default(self):
        """Test default values for optional fields."""
        config = ConsoleConfig({'server': {'listen_address': '0.0.0.0', 'port': 8080}})
        
        assert config.language == Language.PRIMARY
        assert config.cache_size == 32
        assert config.symbol_threshold == 50
    
    def test_empty_optional_sections(self):
        """Test that empty optional sections fall back to defaults."""
        config = ConsoleConfig({
            'server': {'listen_address': '0.0.0.0', 'port': 8080},
            'console': None,
            'history': None
        })
        
        assert config.cache_size == 32
        assert config.symbol_threshold == 50
    
    def test_missing_listen_address(self):
        """Test that missing server.listen_address raises ConfigurationError."""
        with pytest.raises(ConfigurationError) as exc_info:
            ConsoleConfig({'server': {'port': 8080}})
        
        assert 'server.listen_address' in str(exc_info.value)
    
    def test_missing_server_section(self):
        with pytest.raises(ConfigurationError) as exc_info:
            ConsoleConfig({'console': {'language': 'primary'}})
        
        assert 'server' in str(exc_info.value)
    
    def test_port_wrong_type(self):
        """Test that a string port raises ConfigurationError."""
        config_dict = valid_config_dict()
        config_dict['server']['port'] = '8080'
        
        with pytest.raises(ConfigurationError) as exc_info:
            ConsoleConfig(config_dict)
        
        assert 'server.port' in str(exc_info.value)
    
    def test_port_out_of_range(self):
        config_dict = valid_config_dict()
        config_dict['server']['port'] = 70000
        
        with pytest.raises(ConfigurationError):
            ConsoleConfig(config_dict)
    
    def test_unknown_language(self):
        config_dict = valid_config_dict()
        config_dict['console']['language'] = 'de'
        
        with pytest.raises(ConfigurationError) as exc_info:
            ConsoleConfig(config_dict)
        
        assert 'console.language' in str(exc_info.value)
    
    def test_non_positive_cache_size(self):
        config_dict = valid_config_dict()
        config_dict['console']['cache_size'] = 0
        
        with pytest.raises(ConfigurationError):
            ConsoleConfig(config_dict)
    
    def test_boolean_is_not_an_int(self):
        config_dict = valid_config_dict()
        config_dict['console']['cache_size'] = True
        
        with pytest.raises(ConfigurationError):
            ConsoleConfig(config_dict)


class TestConfigFileLoading:
    """Test loading configuration from YAML files."""
    
    def test_load_from_file(self):
        """Test loading a configuration from a YAML file."""
        yaml_content = """
server:
  listen_address: "127.0.0.1"
  port: 9000
console:
  language: fallback
"""
        with tempfile.NamedTemporaryFile(mode='w', suffix='.yaml', delete=False) as f:
            f.write(yaml_content)
            path = f.name
        
        try:
            config = ConsoleConfig.from_file(path)
            assert config.port == 9000
            assert config.language == Language.FALLBACK
        finally:
            os.unlink(path)
    
    def test_example_config_is_valid(self):
        """The shipped example configuration loads cleanly."""
        path = os.path.join(os.path.dirname(__file__), '..', 'config', 'console.example.yaml')
        
        config = ConsoleConfig.from_file(path)
        
        assert config.language == Language.PRIMARY
        assert config.cache_size == 32
    
    def test_file_not_found(self):
        with pytest.raises(ConfigurationError) as exc_info:
            ConsoleConfig.from_file('/nonexistent/console.yaml')
        
        assert 'not found' in str(exc_info.value)
    
    def test_empty_file(self):
        with tempfile.NamedTemporaryFile(mode='w', suffix='.yaml', delete=False) as f:
            path = f.name
        
        try:
            with pytest.raises(ConfigurationError) as exc_info:
                ConsoleConfig.from_file(path)
            assert 'empty' in str(exc_info.value)
        finally:
            os.unlink(path)
    
    def test_invalid_yaml(self):
        with tempfile.NamedTemporaryFile(mode='w', suffix='.yaml', delete=False) as f:
            f.write("server: [unclosed\n")
            path = f.name
        
        try:
            with pytest.raises(ConfigurationError) as exc_info:
                ConsoleConfig.from_file(path)
            assert 'YAML' in str(exc_info.value)
        finally:
            os.unlink(path)
    
    def test_non_mapping_root(self):
        with tempfile.NamedTemporaryFile(mode='w', suffix='.yaml', delete=False) as f:
            f.write("- just\n- a list\n")
            path = f.name
        
        try:
            with pytest.raises(ConfigurationError):
                ConsoleConfig.from_file(path)
        finally:
            os.unlink(path)
