"""Expense endpoints"""
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status

from shareledger.api.deps import get_expense_repository
from shareledger.core.exceptions import (AuthorizationError, NotFoundError,
                                         ValidationError)
from shareledger.repositories.expense_repository import ExpenseRepository
from shareledger.schemas.expense import (ExpenseCreate, ExpenseListResponse,
                                         ExpenseResponse, SettleAllRequest,
                                         SettleMemberRequest)
from shareledger.services.expense_service import ExpenseService

router = APIRouter(tags=["Expenses"])


@router.post("/expenses", response_model=ExpenseResponse, status_code=status.HTTP_201_CREATED)
async def create_expense(
    expense_data: ExpenseCreate,
    repository: ExpenseRepository = Depends(get_expense_repository),
):
    """
    Create a new expense.

    Runs the requested split and stores the expense with every share
    unsettled.

    Args:
        expense_data: Expense creation data with split parameters
        repository: Expense store

    Returns:
        Created expense with its splits

    Raises:
        400: If the split produced no allocations
    """
    try:
        expense = ExpenseService.create_expense(expense_data, repository)
        return ExpenseResponse.model_validate(expense)
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=e.message
        )


@router.get("/groups/{group_id}/expenses", response_model=ExpenseListResponse)
async def list_group_expenses(
    group_id: UUID,
    repository: ExpenseRepository = Depends(get_expense_repository),
):
    """
    Get the expenses of a group, oldest first.

    Args:
        group_id: Group UUID
        repository: Expense store

    Returns:
        List of expenses
    """
    expenses = ExpenseService.list_group_expenses(group_id, repository)
    return ExpenseListResponse(
        items=[ExpenseResponse.model_validate(e) for e in expenses]
    )


@router.get("/expenses/{expense_id}", response_model=ExpenseResponse)
async def get_expense(
    expense_id: UUID,
    repository: ExpenseRepository = Depends(get_expense_repository),
):
    """
    Get detailed information about a specific expense.

    Raises:
        404: If expense not found
    """
    try:
        expense = ExpenseService.get_expense(expense_id, repository)
        return ExpenseResponse.model_validate(expense)
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=e.message
        )


@router.delete("/expenses/{expense_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_expense(
    expense_id: UUID,
    repository: ExpenseRepository = Depends(get_expense_repository),
):
    """
    Delete an expense.

    Deletion does not depend on settlement state.

    Raises:
        404: If expense not found
    """
    try:
        ExpenseService.delete_expense(expense_id, repository)
        return None
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=e.message
        )


@router.post("/expenses/{expense_id}/settle", response_model=ExpenseResponse)
async def settle_member(
    expense_id: UUID,
    request: SettleMemberRequest,
    repository: ExpenseRepository = Depends(get_expense_repository),
):
    """
    Mark one member's share as reimbursed.

    A member without a share on the expense leaves it unchanged.

    Raises:
        404: If expense not found
    """
    try:
        expense = ExpenseService.settle_member(expense_id, request.member_id, repository)
        return ExpenseResponse.model_validate(expense)
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=e.message
        )


@router.post("/expenses/{expense_id}/settle-all", response_model=ExpenseResponse)
async def settle_all(
    expense_id: UUID,
    request: SettleAllRequest,
    repository: ExpenseRepository = Depends(get_expense_repository),
):
    """
    Mark every share of an expense as reimbursed.

    Raises:
        404: If expense not found
        403: If the requester did not pay for the expense
    """
    try:
        expense = ExpenseService.settle_all(expense_id, request.requested_by, repository)
        return ExpenseResponse.model_validate(expense)
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=e.message
        )
    except AuthorizationError as e:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=e.message
        )
