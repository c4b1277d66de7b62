"""Account-key descriptors derived from keyrings"""

from .options import WeightedMultiSigOptions, DefaultWeightedOptionsFiller
from .descriptor import AccountKeyType, RoleKeyEntry, AccountDescriptor, build_account_descriptor

__all__ = [
    "WeightedMultiSigOptions",
    "DefaultWeightedOptionsFiller",
    "AccountKeyType",
    "RoleKeyEntry",
    "AccountDescriptor",
    "build_account_descriptor",
]
