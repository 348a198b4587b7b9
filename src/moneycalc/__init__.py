"""moneycalc — personal finance calculators."""

__version__ = "0.1.0"

from moneycalc.calculators.car_loan import CarLoanResult as CarLoanResult
from moneycalc.calculators.car_loan import calculate_car_loan as calculate_car_loan
from moneycalc.calculators.credit_card import CreditCardResult as CreditCardResult
from moneycalc.calculators.credit_card import NeverPaysOff as NeverPaysOff
from moneycalc.calculators.credit_card import PaidOff as PaidOff
from moneycalc.calculators.credit_card import (
    calculate_credit_card_payoff as calculate_credit_card_payoff,
)
from moneycalc.calculators.goals import SaveForGoalResult as SaveForGoalResult
from moneycalc.calculators.goals import SaveMillionResult as SaveMillionResult
from moneycalc.calculators.goals import SavingsGrowthResult as SavingsGrowthResult
from moneycalc.calculators.goals import calculate_save_for_goal as calculate_save_for_goal
from moneycalc.calculators.goals import calculate_save_million as calculate_save_million
from moneycalc.calculators.goals import calculate_savings_growth as calculate_savings_growth
from moneycalc.calculators.paycheck import PaycheckResult as PaycheckResult
from moneycalc.calculators.paycheck import calculate_paycheck as calculate_paycheck
from moneycalc.config.schema import CarLoanForm as CarLoanForm
from moneycalc.config.schema import CreditCardForm as CreditCardForm
from moneycalc.config.schema import PaycheckForm as PaycheckForm
from moneycalc.config.schema import SaveForGoalForm as SaveForGoalForm
from moneycalc.config.schema import SaveMillionForm as SaveMillionForm
from moneycalc.config.schema import SavingsGrowthForm as SavingsGrowthForm
from moneycalc.taxes.us_federal import calculate_federal_tax as calculate_federal_tax
from moneycalc.taxes.year_config import get_tax_config as get_tax_config
