"""Modelos y entidades del dominio.

Por qué:
- Aquí viven las estructuras de datos puras y estrictas (Pydantic v2),
  la taxonomía de errores y las reglas puras sobre URLs.
- El dominio no conoce HTTP, CLI, ni SDKs: solo conceptos del problema.
"""
