"""
Shared sample data for pipeline tests
"""

import os
import sys

# Add project root to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import polars as pl
import pytest

from src.extract.staging import RawEmployeeStaging

BASE_EMPLOYEE = {
    "Age": 35,
    "Attrition": "No",
    "BusinessTravel": "Travel_Rarely",
    "Department": "Research & Development",
    "DistanceFromHome": 5,
    "Education": 3,
    "EducationField": "Life Sciences",
    "Gender": "Male",
    "JobRole": "Research Scientist",
    "MaritalStatus": "Married",
    "MonthlyIncome": 5000,
    "NumCompaniesWorked": 2,
    "OverTime": "No",
    "TotalWorkingYears": 10,
    "YearsAtCompany": 5,
    "JobSatisfaction": 3,
    "WorkLifeBalance": 3,
    "JobInvolvement": 3,
}


def make_raw_employees(overrides):
    """Build a raw employee frame, one row per overrides dict"""
    rows = [{**BASE_EMPLOYEE, **row} for row in overrides]
    return pl.DataFrame(rows, strict=False, infer_schema_length=None)


@pytest.fixture
def raw_employees_df():
    """Ten raw employees, three of whom left"""
    return make_raw_employees(
        [
            {"Attrition": "Yes", "Department": "Sales", "JobRole": "Sales Executive",
             "MonthlyIncome": 2500, "YearsAtCompany": 2, "OverTime": "Yes",
             "Gender": "male", "MaritalStatus": "Single", "WorkLifeBalance": 1},
            {"Attrition": "yes", "Department": "Sales", "JobRole": "Sales Representative",
             "MonthlyIncome": 2100, "YearsAtCompany": 1, "OverTime": "YES",
             "BusinessTravel": "Travel_Frequently", "WorkLifeBalance": 2},
            {"Attrition": "Yes", "Department": "Research & Development",
             "MonthlyIncome": 4000, "YearsAtCompany": 4, "Gender": "female",
             "MaritalStatus": "Divorced"},
            {"Department": "Sales", "JobRole": "Sales Executive",
             "MonthlyIncome": 9000, "YearsAtCompany": 10},
            {"MonthlyIncome": 6000, "YearsAtCompany": 7, "BusinessTravel": "Non-Travel"},
            {"MonthlyIncome": 3000, "YearsAtCompany": 3, "WorkLifeBalance": 4},
            {"Department": "Human Resources", "JobRole": "Human Resources",
             "MonthlyIncome": 8000, "YearsAtCompany": 8},
            {"MonthlyIncome": 2999, "YearsAtCompany": 0},
            {"MonthlyIncome": 8001, "YearsAtCompany": 12, "OverTime": "Yes"},
            {"MonthlyIncome": 4500, "YearsAtCompany": 6},
        ]
    )


@pytest.fixture
def raw_staging(raw_employees_df):
    return RawEmployeeStaging(raw_employees_df, source="fixture")
