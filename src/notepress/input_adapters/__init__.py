"""Corpus implementations."""

from notepress.input_adapters.vault import VaultCorpus

__all__ = ["VaultCorpus"]
