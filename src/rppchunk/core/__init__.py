# topmark:header:start
#
#   project      : RppChunk
#   file         : __init__.py
#   file_relpath : src/rppchunk/core/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Scan engine building blocks: tokenizer, element stack, opaque regions,
operation variants, results, observers and the traversal engine itself."""
