"""Vaultsage - an AI assistant for markdown note vaults."""

__version__ = "0.1.0"
