"""
Sample document texts shared by the test modules.
"""

T4_TEXT = """
Statement of Remuneration Paid (T4)
Employer: Acme Transport Inc
Box 14: 65,000.00
Box 22: 12,000.00
Box 16: 3,500.00
Box 18: 1,000.00
Year: 2024
"""

RL1_TEXT = """
Relevé 1 - RL-1 Revenus d'emploi
Employeur: Transport Laval Inc
Case A: 55,000.00
Case B.A: 3,200.00
Case C: 800.00
Case E: 9,000.00
Case H: 300.00
Année: 2024
"""

T4A_TEXT = """
T4A Statement of Pension, Retirement, Annuity, and Other Income
Box 16: 24,000.00
Box 20: 5,000.00
Box 22: 3,000.00
Year: 2024
"""

RL2_TEXT = """
Relevé 2 RL-2 Revenus de retraite et rentes
Case A: 12,000.00
Case C: 8,000.00
Case D: 1,500.00
Année: 2024
"""

UBER_ANNUAL_TEXT = """
UBER RIDES - GROSS FARES BREAKDOWN
This section indicates the fees you have charged to Riders.
GST you collected from Riders CA$150.50
QST you collected from Riders CA$75.25
Total CA$1,500.00

UBER RIDES - FEES BREAKDOWN
This section indicates the fees you have paid to Uber.
GST you paid to Uber CA$50.00
QST you paid to Uber CA$25.00
Total CA$250.00

UBER EATS - GROSS FARES BREAKDOWN
GST you collected from Uber CA$45.00
QST you collected from Uber CA$22.50
Total CA$500.00

OTHER INCOME BREAKDOWN
This section indicates other amounts paid to you by Uber.
GST you collected from Uber QST you collected from Uber Total CA$0.00
CA$0.00

OTHER POTENTIAL DEDUCTIONS
Online Mileage 350 km

Tax summary for the period 2024
"""

UBER_ZERO_TEXT = """
Uber
Tax summary for the period 2024
UBER RIDES - GROSS FARES BREAKDOWN
Total CA$0.00
Tips CA$0.00
Tolls CA$0.00
Online Mileage 0 km
Total Trips: 0
Net Earnings CA$0.00
FEES BREAKDOWN
Total CA$0.00
"""

LYFT_TEXT = """
Lyft Driver Weekly Summary
Period: Jan 1 - Jan 7, 2024
Gross Earnings: $850.00
Tips: $95.00
Total Rides: 42
Platform Fee: $170.00
Net Earnings: $775.00
Distance: 610 mi
lyft.com
"""

TAXI_TEXT = """
Diamond Taxi Monthly Statement
Period: March 2024
Gross Income: $4,200.00
Tips: $300.00
Dispatch Fee: $400.00
Net Income: $3,800.00
"""

GAS_TEXT = """
Shell Gas Station
Date: 03/15/2024
Liters: 45.5
Price per L: $1.45
Total: $65.98
"""

MAINTENANCE_TEXT = """
Midas Auto Service
Date: 06/10/2024
Brake Repair
Parts: $180.00
Labor: $120.00
Subtotal: $300.00
Tax: $45.00
Total: $345.00
"""

INSURANCE_TEXT = """
Intact Insurance
Premium: $1,850.00
Coverage Period: 01/01/2024 to 12/31/2024
Policy Number: POL-778812
2021 Toyota Corolla
"""

PARKING_TEXT = """
City Parking Zone 12
Duration: 2 hours
Date: 04/11/2024
Amount: $8.50
"""

PHONE_TEXT = """
Rogers Wireless
Billing Period: Mar 1 - Mar 31, 2024
Account Number: 123-456
Monthly Plan: $65.00
Data Usage: 8.5 GB
Total Amount Due: $73.45
"""

MEAL_TEXT = """
Tim Hortons
Date: 05/02/2024
Subtotal: $12.50
Tax: $1.63
Tip: $2.00
Total: $16.13
"""

RANDOM_TEXT = "This is just some random text that does not match any pattern"
