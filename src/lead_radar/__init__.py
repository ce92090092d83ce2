"""Lead Radar - AI hardware sales signal detection and lead scoring."""

__version__ = "1.0.0"
