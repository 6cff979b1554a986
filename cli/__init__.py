"""Ferramentas de linha de comando do pipestep."""
