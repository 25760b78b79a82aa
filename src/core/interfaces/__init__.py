"""Interfaces/abstracciones del Core.

Por qué:
- Define contratos (Protocol) para la persistencia del registro y la
  confirmación interactiva.
- El pipeline depende de estas abstracciones, no del JSON ni de la terminal.
"""
