"""Downloadable sample statement."""

CSV_TEMPLATE_FILENAME = "reconkit_statement_template.csv"

CSV_TEMPLATE = (
    "date,type,description,amount,account\n"
    "2026-01-15,DEB,Waitrose,-45.50,Monzo Current\n"
    "2026-01-01,BGC,Tech Solutions Ltd,4200.00,Monzo Current\n"
    "2026-01-20,FPO,Amex Payment,-150.00,Monzo Current\n"
    "2026-01-20,FPI,Amex Payment,150.00,Amex#Debt\n"
    "2026-01-25,FPI,Monthly saving,300.00,Marcus#Savings\n"
)
