"""Contratos (Protocols) entre el Core y los adaptadores."""
