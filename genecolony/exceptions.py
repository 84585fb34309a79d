"""Exceptions — error taxonomy for genecolony.

Construction-time failures abort the enclosing construction entirely;
no partial Genotype or Adaptatype is ever produced.  Nothing here is
retried by the engine.
"""

from __future__ import annotations


class GeneticsError(Exception):
    """Base for all genecolony exceptions."""


class TranscriptionError(GeneticsError):
    """A required locus could not be transcribed from the nucleus."""


class AdaptationError(GeneticsError):
    """The adapter yielded nothing for a trait that matched a factor."""


class FitnessUndefinedError(GeneticsError):
    """An organism's fitness could not be computed during evaluation."""


class GenerationExhaustedError(GeneticsError):
    """The generation counter has no successor."""


class UnimplementedFeatureError(GeneticsError, NotImplementedError):
    """A deliberately unimplemented feature was invoked."""
