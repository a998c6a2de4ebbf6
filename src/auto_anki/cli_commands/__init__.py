"""CLI command modules for auto-anki.

- shared.py: config/logger loading and the rich console
- generation_commands.py / generate_handler.py: generate-note and generate-file
- core_commands.py / check_handler.py: provider configuration check
"""
