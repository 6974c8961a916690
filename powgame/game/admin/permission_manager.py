"""
Access-control role provisioning
"""

import logging
from typing import List, Protocol

from ...contracts.capabilities import AccessControl
from ...types import (
    DEFI_OPERATOR_ROLE,
    ERC20_FARM_OPERATOR_ROLE,
    ERC20_ISSUER_ROLE,
    LPSFT_FARM_OPERATOR_ROLE,
    LPSFT_ISSUER_ROLE,
    RoleAssignment,
    TxResult,
)

logger = logging.getLogger(__name__)


# Every access-control edge the game needs, as (role, contract, grantee)
ROLE_ASSIGNMENTS: List[RoleAssignment] = [
    # Issuers of the ERC-20 tokens
    RoleAssignment(ERC20_ISSUER_ROLE, "pow5Token", "defiManager"),
    RoleAssignment(ERC20_ISSUER_ROLE, "noPow5Token", "defiManager"),
    RoleAssignment(ERC20_ISSUER_ROLE, "lpPow1Token", "lpSft"),
    RoleAssignment(ERC20_ISSUER_ROLE, "lpPow5Token", "lpSft"),
    # Issuers of the LP-SFTs
    RoleAssignment(LPSFT_ISSUER_ROLE, "lpSft", "pow1LpNftStakeFarm"),
    RoleAssignment(LPSFT_ISSUER_ROLE, "lpSft", "pow5LpNftStakeFarm"),
    RoleAssignment(LPSFT_ISSUER_ROLE, "noLpSft", "yieldHarvest"),
    # Operators
    RoleAssignment(DEFI_OPERATOR_ROLE, "defiManager", "liquidityForge"),
    RoleAssignment(ERC20_FARM_OPERATOR_ROLE, "pow5InterestFarm", "liquidityForge"),
    RoleAssignment(LPSFT_FARM_OPERATOR_ROLE, "pow1LpSftLendFarm", "yieldHarvest"),
    RoleAssignment(LPSFT_FARM_OPERATOR_ROLE, "pow5LpSftLendFarm", "reverseRepo"),
]


class AccessControlSource(Protocol):
    def address(self, name: str) -> str:
        ...

    def access_control(self, name: str) -> AccessControl:
        ...


class PermissionManager:
    """
    Grants the missing edges of the role table

    Each edge is read with hasRole() before anything is sent, so a second
    run against the same network submits nothing.

    Usage:
        manager = PermissionManager(ContractLibrary(web3, signer, book))
        receipts = manager.initialize_roles()
    """

    def __init__(self, contracts: AccessControlSource, assignments: List[RoleAssignment] = None):
        self._contracts = contracts
        self.assignments = list(assignments if assignments is not None else ROLE_ASSIGNMENTS)

    def _check_addresses(self) -> None:
        for assignment in self.assignments:
            self._contracts.address(assignment.contract)
            self._contracts.address(assignment.grantee)

    def pending_assignments(self) -> List[RoleAssignment]:
        """
        Edges that are not granted yet, without sending anything

        Raises:
            PreconditionViolation: If any contract in the table has no address
        """
        self._check_addresses()

        pending = []
        for assignment in self.assignments:
            contract = self._contracts.access_control(assignment.contract)
            grantee = self._contracts.address(assignment.grantee)
            if not contract.has_role(assignment.role_id, grantee):
                pending.append(assignment)
        return pending

    def initialize_roles(self) -> List[TxResult]:
        """
        Grant every missing role

        Returns:
            One receipt per grant that was needed
        """
        receipts = []
        for assignment in self.pending_assignments():
            contract = self._contracts.access_control(assignment.contract)
            grantee = self._contracts.address(assignment.grantee)
            logger.info(f"Granting {assignment}")
            receipts.append(contract.grant_role(assignment.role_id, grantee))

        if receipts:
            logger.info(f"Granted {len(receipts)} roles")
        else:
            logger.info("All roles already granted")
        return receipts
