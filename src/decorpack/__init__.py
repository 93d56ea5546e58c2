"""Deterministic id assignment and C# project generation for decor expansion packs."""
