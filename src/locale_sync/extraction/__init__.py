"""
Extraction of translatable strings from source code.

This package implements the stage that produces the extracted keys file:
- Source file discovery
- Literal extraction from Python and JavaScript/TypeScript files
- Blacklist filtering
"""
