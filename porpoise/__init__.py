"""
Porpoise survey commitments.

Off-chain builder for the canonical Merkle commitment of a survey
(question, deadline, options) and the inclusion proofs an on-chain
verifier consumes.

Modules only log through logging.getLogger(__name__). Applications that
want output call porpoise.logging_setup.setup_logging_from_config() once,
typically with RuntimeConfig.from_env().logging.
"""

__version__ = "0.1.0"
