from semanticdom.classifier.classifier import Classification, Classifier
from semanticdom.classifier.naming import compute_accessible_name

__all__ = ["Classification", "Classifier", "compute_accessible_name"]
