import numpy as np
import pandas as pd
from pathlib import Path

n_rows = 600
rng = np.random.default_rng(7)

titles = [
    "Data Scientist", "Data Engineer", "Data Analyst", "Machine Learning Engineer",
    "Research Scientist", "Data Science Manager", "Data Architect", "Analytics Engineer",
    "Applied Scientist", "Principal Data Scientist", "ML Engineer", "BI Analyst",
    "Computer Vision Engineer", "Data Science Consultant", "Head of Data", "Lead Data Engineer",
]
experience = ["EN", "MI", "SE", "EX"]
experience_base = {"EN": 60000, "MI": 90000, "SE": 140000, "EX": 190000}

level = rng.choice(experience, size=n_rows, p=[0.15, 0.3, 0.45, 0.1])
salary = np.array([experience_base[l] for l in level]) * rng.lognormal(0.0, 0.25, size=n_rows)

df = pd.DataFrame(
    {
        "work_year": rng.choice([2020, 2021, 2022, 2023], size=n_rows),
        "experience_level": level,
        "employment_type": rng.choice(["FT", "PT", "CT", "FL"], size=n_rows, p=[0.9, 0.04, 0.04, 0.02]),
        "job_title": rng.choice(titles, size=n_rows),
        "salary_in_usd": salary.round(0).astype(int),
        "remote_ratio": rng.choice([0, 50, 100], size=n_rows),
        "company_location": rng.choice(["US", "GB", "DE", "CA", "IN", "ES"], size=n_rows),
        "company_size": rng.choice(["S", "M", "L"], size=n_rows, p=[0.1, 0.6, 0.3]),
    }
)

Path("data").mkdir(exist_ok=True)
df.to_csv("data/ds_salaries.csv", index=False)
print("wrote data/ds_salaries.csv", df.shape)
