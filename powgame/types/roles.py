"""
Access-control role identifiers and desired role edges
"""

from dataclasses import dataclass


def role_id(name: str) -> bytes:
    """
    bytes32 role identifier: the UTF-8 role name right-padded with zeros

    Raises:
        ValueError: If the name does not fit in 32 bytes
    """
    raw = name.encode("utf-8")
    if len(raw) > 32:
        raise ValueError(f"Role name too long for bytes32: {name}")
    return raw.ljust(32, b"\x00")


ERC20_ISSUER_ROLE = "ERC20_ISSUER_ROLE"
LPSFT_ISSUER_ROLE = "LPSFT_ISSUER_ROLE"
DEFI_OPERATOR_ROLE = "DEFI_OPERATOR_ROLE"
ERC20_FARM_OPERATOR_ROLE = "ERC20_FARM_OPERATOR_ROLE"
LPSFT_FARM_OPERATOR_ROLE = "LPSFT_FARM_OPERATOR_ROLE"


@dataclass(frozen=True)
class RoleAssignment:
    """
    One desired access-control edge

    Attributes:
        role: Role name (e.g. "ERC20_ISSUER_ROLE")
        contract: Logical name of the contract that holds the role table
        grantee: Logical name of the contract that receives the role
    """
    role: str
    contract: str
    grantee: str

    @property
    def role_id(self) -> bytes:
        return role_id(self.role)

    def __str__(self) -> str:
        return f"{self.contract}.{self.role} -> {self.grantee}"
