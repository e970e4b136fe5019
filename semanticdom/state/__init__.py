from semanticdom.state.store import StateStore
from semanticdom.state.synthesizer import StateGraphSynthesizer
from semanticdom.state.transitions import transitions_for

__all__ = ["StateGraphSynthesizer", "StateStore", "transitions_for"]
