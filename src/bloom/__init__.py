"""
Bloom - Age-Adaptive Emotion Check-In Backend

This package provides the check-in session model behind the Bloom
mobile app: age profiles, session aggregation, adaptive prompts and
the clinical summaries shared with guardians and care teams.

IMPORTANT: Users are children and adolescents. Emotional data is
sensitive and must only be shared with authorized guardians and
healthcare providers.
"""

__version__ = "0.1.0"
__author__ = "Bloom Engineering Team"
