"""Modelos y entidades del dominio.

Estructuras de datos puras (Pydantic v2): tags, versiones y resultados del
ranking. El dominio no conoce HTTP ni la CLI.
"""
