"""BRC-20 inscription export (OKLink -> CryptoTaxCalculator CSV)."""

__version__ = "0.1.0"
