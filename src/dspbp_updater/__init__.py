"""dspbp-updater - keep a local FactoryBluePrints checkout in sync."""

__version__ = "0.1.0"
