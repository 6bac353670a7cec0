"""Heroforge: rules engine for a tabletop RPG character builder.

Entry points:
    heroforge.character.CharacterSheet: point-buy, classes, skills and checks
    heroforge.persistence.CharacterStore: load/save against the remote service
    heroforge.log_config.configure_logging: structlog setup from Settings,
        called once by the embedding application at startup
"""

__version__ = "0.1.0"
