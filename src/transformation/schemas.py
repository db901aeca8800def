"""
Transformation Layer Schemas

Canonical employee table, derived categories and attrition summary tables.
"""

import polars as pl

# Canonical employee table as produced by the Loader (before normalization)
EMPLOYEE_SCHEMA = pl.Schema(
    [
        ("EmployeeID", pl.Int64()),
        ("Age", pl.Int64()),
        ("Attrition", pl.Int8()),
        ("BusinessTravel", pl.String()),
        ("Department", pl.String()),
        ("DistanceFromHome", pl.Int64()),
        ("Education", pl.Int64()),
        ("EducationField", pl.String()),
        ("Gender", pl.String()),
        ("JobRole", pl.String()),
        ("MaritalStatus", pl.String()),
        ("MonthlyIncome", pl.Float64()),
        ("NumCompaniesWorked", pl.Int64()),
        ("OverTime", pl.Int8()),
        ("TotalWorkingYears", pl.Int64()),
        ("YearsAtCompany", pl.Int64()),
        ("JobSatisfaction", pl.Int64()),
        ("WorkLifeBalance", pl.Int64()),
        ("JobInvolvement", pl.Int64()),
    ]
)

# Employee table after categorization
CATEGORIZED_EMPLOYEE_SCHEMA = pl.Schema(
    list(EMPLOYEE_SCHEMA.items())
    + [
        ("TenureCategory", pl.String()),
        ("SalaryCategory", pl.String()),
    ]
)

# One row per group value for an attrition dimension
ATTRITION_SUMMARY_SCHEMA = pl.Schema(
    [
        ("GroupKey", pl.String()),
        ("TotalEmployees", pl.Int64()),
        ("AttritionCount", pl.Int64()),
        ("AttritionRate", pl.Float64()),
    ]
)

# Closed ranges for ordinal ratings
ORDINAL_RANGES = {
    "Education": (1, 5),
    "JobSatisfaction": (1, 4),
    "WorkLifeBalance": (1, 4),
    "JobInvolvement": (1, 4),
}

POSITIVE_FIELDS = ["Age", "MonthlyIncome"]
NON_NEGATIVE_FIELDS = [
    "DistanceFromHome",
    "YearsAtCompany",
    "TotalWorkingYears",
    "NumCompaniesWorked",
]

# Fields checked for missing values after load
REQUIRED_FIELDS = ["Age", "Attrition", "BusinessTravel", "DistanceFromHome"]

# Label rewrites
BUSINESS_TRAVEL_LABELS = {
    "Travel_Rarely": "Rarely",
    "Travel_Frequently": "Frequently",
    "Non-Travel": "No Travel",
}
GENDER_LABELS = {"male": "M", "female": "F"}
MARITAL_STATUS_LABELS = {"Single": "S", "Married": "M", "Divorced": "D"}

TENURE_CATEGORIES = ["Short-Term", "Medium-Term", "Long-Term"]
SALARY_CATEGORIES = ["Low", "Medium", "High"]

INCOME_CAP_MULTIPLIER = 3

# Grouping dimensions; None means the whole table
ATTRITION_DIMENSIONS = {
    "overall": None,
    "department": "Department",
    "salary_category": "SalaryCategory",
    "job_role": "JobRole",
    "tenure_category": "TenureCategory",
    "work_life_balance": "WorkLifeBalance",
    "overtime": "OverTime",
}

OVERALL_GROUP_KEY = "All Employees"
