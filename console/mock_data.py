"""Deterministic sample data for the screens that have no backend yet."""

MOCK_ASSETS = [
    {"id": "A-101", "code": "85", "name": "F-550 Truck", "assetType": "Truck", "status": "ACTIVE", "meter": 128442, "pmDue": "750 mi", "location": "Yard 3"},
    {"id": "A-102", "code": "25400", "name": "Case 621G", "assetType": "Loader", "status": "IN_SHOP", "meter": 6402, "pmDue": "Due now", "location": "Shop"},
    {"id": "A-103", "code": "25250", "name": "Case SV280B", "assetType": "Skid", "status": "ACTIVE", "meter": 3121, "pmDue": "120 hrs", "location": "Route 12"},
    {"id": "A-104", "code": "PL-22", "name": "Western Wide-Out Plow", "assetType": "Attachment", "status": "ACTIVE", "meter": 0, "pmDue": "-", "location": "Yard 1"},
    {"id": "A-105", "code": "SLT-9", "name": "SaltDogg 2yd", "assetType": "Salter", "status": "OUT_OF_SERVICE", "meter": 0, "pmDue": "-", "location": "Shop"},
]

# dueIn <= 0 means overdue
MOCK_PM = [
    {"id": "PM-1", "asset": "F-550 Flatbed", "template": "Oil & Filter", "dueIn": -150, "unit": "mi", "priority": "HIGH"},
    {"id": "PM-2", "asset": "Case 621G", "template": "Hydraulic Service", "dueIn": 12, "unit": "hrs", "priority": "MEDIUM"},
    {"id": "PM-3", "asset": "Case SV280B", "template": "Grease Points", "dueIn": 4, "unit": "hrs", "priority": "LOW"},
]

MOCK_WORK_ORDERS = [
    {"number": "WO-10045", "asset": "F-550 Flatbed", "status": "OPEN", "priority": "HIGH", "tasks": 3, "eta": "Aug 20"},
    {"number": "WO-10046", "asset": "Case 621G", "status": "IN_PROGRESS", "priority": "CRITICAL", "tasks": 5, "eta": "Aug 19"},
    {"number": "WO-10047", "asset": "International 4300", "status": "ON_HOLD", "priority": "MEDIUM", "tasks": 2, "eta": "Aug 22"},
]

MOCK_INSPECTIONS = [
    {"id": "DVIR-4412", "asset": "F-550 Flatbed", "driver": "T. Kuykendall", "result": "FAIL", "time": "Today 08:14"},
    {"id": "DVIR-4413", "asset": "Case SV280B", "driver": "A. Ruby", "result": "PASS", "time": "Today 06:55"},
    {"id": "DVIR-4410", "asset": "Case 621G", "driver": "J. Lumb", "result": "PASS", "time": "Yesterday 18:22"},
]

INSPECTION_FORMS = [
    {"name": "Pre-Trip (Truck)", "items": 28},
    {"name": "Loader Daily", "items": 18},
    {"name": "Skid Steer Daily", "items": 16},
]

MOCK_PARTS = [
    {"name": "Oil Filter", "onHand": 12},
    {"name": "Top Strobe Light", "onHand": 5},
    {"name": "Steer Tires", "onHand": 6},
]

MOCK_DRIVERS = ["J. Smith", "M. Lopez", "T. Bennett", "A. Patel"]

SETTINGS_SECTIONS = [
    {"title": "Organization", "description": "Users, roles, and permissions."},
    {"title": "Integrations", "description": "Telematics, email, SMS."},
    {"title": "PM Policies", "description": "Intervals, buffers, reminders."},
    {"title": "DVIR Settings", "description": "Forms, signatures, OOS rules."},
]
