"""
Demo fleet used when no saved state exists and SEED_DEMO_DATA is enabled.
"""
from medtrack.schemas.state import AppState

CITY_GENERAL = {"facilityId": "FAC-001", "facilityName": "City General Hospital"}
REGIONAL = {"facilityId": "FAC-002", "facilityName": "Regional Medical Center"}

DEMO_FACILITIES = [
    {
        "id": "FAC-001",
        "name": "City General Hospital",
        "type": "Hospital",
        "address": {
            "street": "123 Medical Center Drive",
            "city": "Metropolitan City",
            "state": "State",
            "zipCode": "12345",
            "country": "USA",
        },
        "contactInfo": {"phone": "+1-555-0123", "email": "info@cityhospital.com", "website": "www.cityhospital.com"},
        "primaryContact": {
            "name": "Dr. Sarah Johnson",
            "title": "Chief Medical Officer",
            "phone": "+1-555-0124",
            "email": "sarah.johnson@cityhospital.com",
        },
        "technicalContact": {
            "name": "Mark Thompson",
            "title": "Biomedical Engineer",
            "phone": "+1-555-0125",
            "email": "mark.thompson@cityhospital.com",
        },
        "departments": ["ICU", "Emergency Room", "Surgery", "Cardiology", "Radiology"],
        "operatingHours": {"weekdays": "24/7", "weekends": "24/7", "holidays": "24/7"},
        "notes": "Major teaching hospital with 500+ beds",
        "status": "Active",
        "contractStartDate": "2023-01-01",
        "contractEndDate": "2025-12-31",
        "deviceCount": 15,
        "lastVisitDate": "2024-01-15",
        "createdAt": "2023-01-01T00:00:00Z",
        "updatedAt": "2024-01-15T00:00:00Z",
    },
    {
        "id": "FAC-002",
        "name": "Regional Medical Center",
        "type": "Medical Center",
        "address": {
            "street": "456 Healthcare Boulevard",
            "city": "Regional City",
            "state": "State",
            "zipCode": "67890",
            "country": "USA",
        },
        "contactInfo": {"phone": "+1-555-0456", "email": "contact@regionalmed.com", "website": "www.regionalmed.com"},
        "primaryContact": {
            "name": "Dr. Michael Davis",
            "title": "Medical Director",
            "phone": "+1-555-0457",
            "email": "michael.davis@regionalmed.com",
        },
        "technicalContact": {
            "name": "Lisa Chen",
            "title": "Clinical Engineer",
            "phone": "+1-555-0458",
            "email": "lisa.chen@regionalmed.com",
        },
        "departments": ["Emergency Room", "Outpatient", "Laboratory", "Imaging"],
        "operatingHours": {
            "weekdays": "6:00 AM - 10:00 PM",
            "weekends": "8:00 AM - 8:00 PM",
            "holidays": "8:00 AM - 6:00 PM",
        },
        "notes": "Regional facility serving rural communities",
        "status": "Active",
        "contractStartDate": "2023-06-01",
        "contractEndDate": "2024-05-31",
        "deviceCount": 8,
        "lastVisitDate": "2024-01-10",
        "createdAt": "2023-06-01T00:00:00Z",
        "updatedAt": "2024-01-10T00:00:00Z",
    },
]

DEMO_DEVICES = [
    {
        "deviceId": "MD-001",
        "type": "Ventilator",
        "model": "VentMax Pro",
        "serialNumber": "VM001234",
        **CITY_GENERAL,
        "status": "Online",
        "batteryLevel": 85,
        "lastServiceDate": "2024-01-15",
        "lastInstallationDate": "2023-12-01",
        "amcStatus": "Active",
        "cmcStatus": "Active",
        "location": "ICU Ward 1",
        "manufacturer": "MedTech Solutions",
        "purchaseDate": "2023-11-15",
        "warrantyExpiry": "2025-11-15",
        "notes": "Regular maintenance completed",
    },
    {
        "deviceId": "MD-002",
        "type": "Patient Monitor",
        "model": "MonitorPro X1",
        "serialNumber": "MP002345",
        **REGIONAL,
        "status": "Maintenance",
        "batteryLevel": 45,
        "lastServiceDate": "2024-01-10",
        "lastInstallationDate": "2023-11-20",
        "amcStatus": "Expiring Soon",
        "cmcStatus": "Active",
        "location": "Emergency Room",
        "manufacturer": "HealthTech Inc",
        "purchaseDate": "2023-10-20",
        "warrantyExpiry": "2025-10-20",
        "notes": "Battery replacement needed",
    },
]

DEMO_INSTALLATIONS = [
    {
        "deviceId": "MD-001",
        "deviceType": "Ventilator",
        **CITY_GENERAL,
        "installationDate": "2023-12-01",
        "engineerId": "ENG-001",
        "engineerName": "John Smith",
        "status": "Completed",
        "checklist": {
            "unboxingPhotos": True,
            "deviceInspection": True,
            "powerConnection": True,
            "networkSetup": True,
            "calibration": True,
            "userTraining": True,
            "documentation": True,
            "finalTesting": True,
        },
        "trainingCompleted": True,
        "trainingDate": "2023-12-01",
        "trainedPersonnel": ["Dr. Sarah Johnson", "Nurse Mary Wilson"],
        "photos": [
            {"filename": "unboxing_1.jpg", "description": "Device unboxing", "uploadDate": "2023-12-01T00:00:00Z"},
            {
                "filename": "installation_complete.jpg",
                "description": "Installation completed",
                "uploadDate": "2023-12-01T00:00:00Z",
            },
        ],
        "notes": "Installation completed successfully. All staff trained.",
        "completionDate": "2023-12-01T00:00:00Z",
    },
]

DEMO_SERVICE_VISITS = [
    {
        "deviceId": "MD-001",
        "deviceType": "Ventilator",
        **CITY_GENERAL,
        "visitDate": "2024-01-15",
        "engineerId": "ENG-002",
        "engineerName": "Mike Johnson",
        "purpose": "Preventive",
        "status": "Completed",
        "description": "Routine maintenance and calibration",
        "workPerformed": ["Filter replacement", "Calibration check", "Software update", "Battery test"],
        "partsUsed": [
            {"name": "Air Filter", "partNumber": "AF-001", "quantity": 2},
            {"name": "O-Ring Seal", "partNumber": "OR-005", "quantity": 1},
        ],
        "timeSpent": 120,
        "nextServiceDate": "2024-07-15",
        "photos": [
            {
                "filename": "before_service.jpg",
                "description": "Device condition before service",
                "uploadDate": "2024-01-15T00:00:00Z",
            },
            {
                "filename": "after_service.jpg",
                "description": "Device condition after service",
                "uploadDate": "2024-01-15T00:00:00Z",
            },
        ],
        "attachments": [
            {
                "filename": "service_report.pdf",
                "description": "Detailed service report",
                "uploadDate": "2024-01-15T00:00:00Z",
            },
        ],
        "notes": "All systems functioning normally. Recommended next service in 6 months.",
        "customerSignature": "Dr. Sarah Johnson",
        "completionDate": "2024-01-15T00:00:00Z",
    },
    {
        "deviceId": "MD-002",
        "deviceType": "Patient Monitor",
        **REGIONAL,
        "visitDate": "2024-01-10",
        "engineerId": "ENG-001",
        "engineerName": "John Smith",
        "purpose": "Breakdown",
        "status": "In Progress",
        "description": "Display flickering issue reported",
        "workPerformed": ["Display diagnostics", "Cable inspection"],
        "partsUsed": [],
        "timeSpent": 45,
        "notes": "Issue identified - display cable needs replacement. Parts ordered.",
    },
]

DEMO_CONTRACTS = [
    {
        "contractNumber": "AMC-2024-001",
        "type": "AMC",
        "deviceId": "MD-001",
        "deviceType": "Ventilator",
        **CITY_GENERAL,
        "startDate": "2024-01-01",
        "endDate": "2024-12-31",
        "status": "Active",
        "value": 15000,
        "currency": "USD",
        "serviceFrequency": "Quarterly",
        "nextServiceDate": "2024-04-01",
        "servicesIncluded": [
            "Preventive Maintenance",
            "Emergency Repairs",
            "Parts Replacement",
            "Software Updates",
            "Training",
        ],
        "contactPerson": "Dr. Sarah Johnson",
        "contactEmail": "sarah.johnson@cityhospital.com",
        "contactPhone": "+1-555-0123",
        "vendor": "MedTech Solutions",
        "vendorContact": "support@medtechsolutions.com",
        "notes": "Standard AMC contract with quarterly maintenance",
        "documents": [
            {
                "filename": "amc_contract_2024.pdf",
                "description": "Signed AMC contract",
                "uploadDate": "2024-01-01T00:00:00Z",
            },
        ],
        "renewalNotified": False,
        "autoRenewal": True,
        "createdAt": "2024-01-01T00:00:00Z",
        "updatedAt": "2024-01-01T00:00:00Z",
    },
    {
        "contractNumber": "CMC-2024-002",
        "type": "CMC",
        "deviceId": "MD-002",
        "deviceType": "Patient Monitor",
        **REGIONAL,
        "startDate": "2024-02-01",
        "endDate": "2024-07-31",
        "status": "Expiring Soon",
        "value": 8000,
        "currency": "USD",
        "serviceFrequency": "Monthly",
        "nextServiceDate": "2024-02-01",
        "servicesIncluded": ["Comprehensive Maintenance", "Parts & Labor", "Technical Support"],
        "contactPerson": "Nurse Mary Wilson",
        "contactEmail": "mary.wilson@regionalmed.com",
        "contactPhone": "+1-555-0456",
        "vendor": "HealthTech Inc",
        "vendorContact": "service@healthtech.com",
        "notes": "CMC contract expiring soon - renewal required",
        "documents": [],
        "renewalNotified": True,
        "autoRenewal": False,
        "createdAt": "2024-02-01T00:00:00Z",
        "updatedAt": "2024-01-20T00:00:00Z",
    },
]

DEMO_PHOTO_LOGS = [
    {
        "deviceId": "MD-001",
        "deviceType": "Ventilator",
        **CITY_GENERAL,
        "filename": "device_condition_jan2024.jpg",
        "originalName": "IMG_20240115_143022.jpg",
        "description": "Monthly condition check - January 2024",
        "category": "Condition Check",
        "uploadDate": "2024-01-15T14:30:22Z",
        "uploadedBy": "John Smith",
        "fileSize": 2048576,
        "mimeType": "image/jpeg",
        "tags": ["monthly-check", "good-condition", "routine"],
        "location": "ICU Ward 1",
        "notes": "Device in excellent condition, no visible wear",
        "isAlert": False,
        "metadata": {"camera": "iPhone 12", "timestamp": "2024-01-15T14:30:22Z"},
    },
    {
        "deviceId": "MD-002",
        "deviceType": "Patient Monitor",
        **REGIONAL,
        "filename": "display_issue_jan2024.jpg",
        "originalName": "IMG_20240110_091545.jpg",
        "description": "Display flickering issue documentation",
        "category": "Issue Documentation",
        "uploadDate": "2024-01-10T09:15:45Z",
        "uploadedBy": "Mike Johnson",
        "fileSize": 1536000,
        "mimeType": "image/jpeg",
        "tags": ["issue", "display-problem", "urgent"],
        "location": "Emergency Room",
        "notes": "Display showing intermittent flickering, needs immediate attention",
        "isAlert": True,
        "alertLevel": "High",
        "metadata": {"camera": "Samsung Galaxy S21", "timestamp": "2024-01-10T09:15:45Z"},
    },
]


def demo_state() -> AppState:
    """A fresh demo state; record ids are generated on every call."""
    return AppState.model_validate(
        {
            "devices": DEMO_DEVICES,
            "installations": DEMO_INSTALLATIONS,
            "serviceVisits": DEMO_SERVICE_VISITS,
            "contracts": DEMO_CONTRACTS,
            "photoLogs": DEMO_PHOTO_LOGS,
            "facilities": DEMO_FACILITIES,
        }
    )
