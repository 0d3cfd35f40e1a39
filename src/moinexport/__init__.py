"""Export Etherpad pads as MoinMoin wiki markup."""

__version__ = "0.1.0"
