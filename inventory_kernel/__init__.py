"""
Inventory Kernel - custom item identifier generation

Mints human-readable, per-inventory unique identifiers from templates
such as ``INV-{YYYY}-{SEQ}``:
- Pattern compilation with permissive literal fallback
- Linearizable per-inventory sequence reservation
- Bounded collision resolution
- Side-effect-free previews
"""

__version__ = "0.1.0"
