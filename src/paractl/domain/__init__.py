"""Domain layer — frontmatter codec, tag transforms, and path rules.

This layer depends only on stdlib and ruamel.yaml.
It must never import from services, infrastructure, commands, or config.
"""
