"""Domain layer: type vocabulary, extractor and error taxonomy.

This layer depends only on stdlib.
It must never import from converters, registry, plugins, config or commands.
"""
