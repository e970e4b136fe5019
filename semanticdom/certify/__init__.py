from semanticdom.certify.certifier import Certifier
from semanticdom.certify.checks import CHECKS, CheckContext

__all__ = ["CHECKS", "CheckContext", "Certifier"]
