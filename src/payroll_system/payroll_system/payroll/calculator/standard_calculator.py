from __future__ import annotations

import logging
from datetime import datetime

from ...common.validators import require_non_negative, require_percentage, to_number
from ...core.enums import AdjustmentMode, PayslipFlag, PayslipStatus
from ...core.exceptions import ValidationError
from ..model import PayslipInput, PayslipRecord
from .base import PayrollCalculator

_logger = logging.getLogger(__name__)


def _effective(amount: float, mode: AdjustmentMode, base: float) -> float:
    if mode == AdjustmentMode.PERCENTAGE:
        return base * amount / 100
    return amount


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule.

    gross = base + allowances + bonus
    net = gross - (deduction + gross * tax_rate / 100)

    Bonus and deduction are either fixed amounts or a percentage of base.
    Nothing is rounded here; negative net pay is flagged, not clamped.
    """

    def compute(self, payslip: PayslipInput, *, created_at: datetime) -> PayslipRecord:
        base = self._base_salary(payslip.base_salary)
        rules = payslip.rules
        allowances = require_non_negative(rules.allowances, "allowances", default=0)
        bonus = require_non_negative(rules.bonus, "bonus", default=0)
        deduction = require_non_negative(rules.deduction, "deduction", default=0)
        tax_rate = require_percentage(rules.tax_rate, "tax rate", default=0)
        bonus_mode = AdjustmentMode.parse(rules.bonus_mode, "bonus type")
        deduction_mode = AdjustmentMode.parse(rules.deduction_mode, "deduction type")

        effective_bonus = _effective(bonus, bonus_mode, base)
        effective_deduction = _effective(deduction, deduction_mode, base)
        gross = base + allowances + effective_bonus
        tax_amount = gross * tax_rate / 100
        total_deductions = effective_deduction + tax_amount
        net = gross - total_deductions

        flags: tuple[PayslipFlag, ...] = ()
        if net < 0:
            _logger.warning(
                "Deductions exceed gross pay for employee %s (%s): net=%.2f",
                payslip.employee_id,
                payslip.period,
                net,
            )
            flags = (PayslipFlag.NEGATIVE_NET_SALARY,)

        return PayslipRecord(
            employee_id=payslip.employee_id,
            employee_name=payslip.employee_name,
            department=payslip.department,
            period=payslip.period,
            base_salary=base,
            allowances=allowances,
            bonus=bonus,
            bonus_mode=bonus_mode,
            deduction=deduction,
            deduction_mode=deduction_mode,
            tax_rate=tax_rate,
            notes=rules.notes or "",
            effective_bonus=effective_bonus,
            effective_deduction=effective_deduction,
            gross_salary=gross,
            tax_amount=tax_amount,
            total_deductions=total_deductions,
            net_salary=net,
            created_at=created_at,
            status=PayslipStatus.PROCESSED,
            flags=flags,
        )

    @staticmethod
    def _base_salary(value) -> float:
        try:
            base = to_number(value, "base salary")
        except ValidationError:
            raise ValidationError("base salary required") from None
        if base < 0:
            raise ValidationError("base salary must not be negative")
        return base
