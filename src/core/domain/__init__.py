"""Modelos y entidades del dominio.

Por qué:
- Aquí viven las estructuras de datos puras (Pydantic v2) y los errores.
- El dominio no conoce HTTP, CLI, ni zip: solo conceptos del problema.
"""
