"""
Micro-Loan Risk Gateway - Loan Eligibility & Risk-Scoring Service

A FastAPI-based microservice that decides micro-loan applications: it runs
the eligibility gate, scores eligible applications, and routes them to an
approval lane with a full audit trail.
"""

__version__ = "0.1.0"
