"""
Extract Layer Schemas

Raw employee fields as they arrive in the staging source.
Attrition and OverTime may still be "Yes"/"No" text at this point.
"""

# Source fields copied from staging into the canonical employee table
RAW_EMPLOYEE_FIELDS = [
    "Age",
    "Attrition",
    "BusinessTravel",
    "Department",
    "DistanceFromHome",
    "Education",
    "EducationField",
    "Gender",
    "JobRole",
    "MaritalStatus",
    "MonthlyIncome",
    "NumCompaniesWorked",
    "OverTime",
    "TotalWorkingYears",
    "YearsAtCompany",
    "JobSatisfaction",
    "WorkLifeBalance",
    "JobInvolvement",
]

# Flags that may be text affirmatives/negatives in the raw source
RAW_FLAG_FIELDS = ["Attrition", "OverTime"]

SUPPORTED_EXTENSIONS = {".csv", ".parquet", ".json"}
