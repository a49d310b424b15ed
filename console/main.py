"""
Main entry point for the RouteLens console API server.
"""

import logging
import sys

import uvicorn

from config.parser import ConsoleConfig, ConfigurationError
from console import api
from pipeline.assembler import ViewModelAssembler


logger = logging.getLogger(__name__)


def configure_api(config: ConsoleConfig) -> None:
    """
    Apply configuration to the API module's shared components.

    Args:
        config: Loaded console configuration
    """
    api.assembler = ViewModelAssembler(cache_size=config.cache_size)
    api.settings["symbol_threshold"] = config.symbol_threshold
    api.settings["language"] = config.language
    logger.info(
        f"Console configured: cache_size={config.cache_size}, "
        f"symbol_threshold={config.symbol_threshold}"
    )


def main():
    """
    Main entry point for the console server.
    """
    # Configure logging
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    
    # Load configuration
    if len(sys.argv) < 2:
        print("Usage: python -m console.main <config_file>")
        sys.exit(1)
    
    config_file = sys.argv[1]
    
    try:
        config = ConsoleConfig.from_file(config_file)
    except ConfigurationError as e:
        logger.error(f"Failed to load configuration: {e}")
        sys.exit(1)
    
    configure_api(config)
    uvicorn.run(api.app, host=config.listen_address, port=config.port)


if __name__ == "__main__":
    main()
