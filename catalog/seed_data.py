"""Built-in catalog used by ``seed_catalog`` and the admin reseed endpoint."""

SERVICES = [
    # ===== Driving Licence =====
    {
        "category": "driving-licence",
        "service_id": "A",
        "name": "Learner Licence",
        "description": "Apply for new learner driving licence",
        "detailed_description": (
            "Complete process for obtaining learner driving licence including "
            "document verification and test."
        ),
        "fee": 500,
        "government_fee": 200,
        "service_fee": 300,
        "processing_time": "3-5 days",
        "requirements": ["Age Proof", "Address Proof", "Medical Certificate"],
        "documents_required": ["Aadhaar Card", "Passport Photos", "Address Proof"],
        "steps": [
            {"stepNumber": 1, "title": "Document Submission", "description": "Submit required documents"},
            {"stepNumber": 2, "title": "Application Form", "description": "Fill application form"},
            {"stepNumber": 3, "title": "Test Appointment", "description": "Schedule learner test"},
        ],
    },
    {"category": "driving-licence", "service_id": "B", "name": "Permanent Licence",
     "description": "Get permanent driving licence", "fee": 1000, "processing_time": "7-10 days"},
    {"category": "driving-licence", "service_id": "C", "name": "Renewal Licence",
     "description": "Renew your existing driving licence", "fee": 800, "processing_time": "5-7 days"},
    {"category": "driving-licence", "service_id": "D", "name": "Duplicate Licence",
     "description": "Apply for duplicate driving licence if lost", "fee": 600, "processing_time": "5-7 days"},
    {"category": "driving-licence", "service_id": "E", "name": "Change of Address in Licence",
     "description": "Update address in driving licence", "fee": 400, "processing_time": "3-5 days"},
    {"category": "driving-licence", "service_id": "F", "name": "International Driving Permit",
     "description": "Apply for international driving permit", "fee": 1500, "processing_time": "7-10 days"},
    {"category": "driving-licence", "service_id": "G", "name": "DL Extract",
     "description": "Get extract of driving licence", "fee": 300, "processing_time": "2-3 days"},
    {"category": "driving-licence", "service_id": "H", "name": "Add Class of Vehicle in Driving Licence",
     "description": "Add new vehicle class to existing licence", "fee": 700, "processing_time": "5-7 days"},

    # ===== Registration Certificate =====
    {"category": "registration-certificate", "service_id": "A", "name": "New Registration of Vehicle",
     "description": "Register new vehicle", "fee": 2000, "processing_time": "7-10 days"},
    {"category": "registration-certificate", "service_id": "B", "name": "Transfer of Vehicle Ownership",
     "description": "Transfer vehicle ownership", "fee": 1500, "processing_time": "7-10 days"},
    {"category": "registration-certificate", "service_id": "C",
     "name": "Hypothecation Add in Registration Certificate",
     "description": "Add hypothecation to RC", "fee": 1000, "processing_time": "5-7 days"},
    {"category": "registration-certificate", "service_id": "D",
     "name": "Hypothecation Terminate in Registration Certificate",
     "description": "Remove hypothecation from RC", "fee": 1000, "processing_time": "5-7 days"},
    {"category": "registration-certificate", "service_id": "E", "name": "Duplicate Registration Certificate",
     "description": "Apply for duplicate RC", "fee": 800, "processing_time": "5-7 days"},
    {"category": "registration-certificate", "service_id": "F", "name": "Issue NOC of Registration Certificate",
     "description": "Get No Objection Certificate", "fee": 600, "processing_time": "3-5 days"},
    {"category": "registration-certificate", "service_id": "G",
     "name": "CNG Add & Remove in Registration Certificate",
     "description": "Add or remove CNG from RC", "fee": 1200, "processing_time": "7-10 days"},
    {"category": "registration-certificate", "service_id": "H", "name": "Fancy Choice Number",
     "description": "Select fancy vehicle number", "fee": 5000, "processing_time": "10-15 days"},
    {"category": "registration-certificate", "service_id": "I",
     "name": "Renewal of Vehicle Registration Certificate",
     "description": "Renew vehicle registration certificate", "fee": 1000, "processing_time": "5-7 days"},

    # ===== Passport =====
    {"category": "passport", "service_id": "A", "name": "New / Renew Passport",
     "description": "Apply for new or renew passport", "fee": 2500, "processing_time": "15-20 days"},
    {"category": "passport", "service_id": "B", "name": "Tatkal Passport",
     "description": "Fast-track passport service", "fee": 4000, "processing_time": "3-5 days"},
    {"category": "passport", "service_id": "C", "name": "Police Clearance Certificate",
     "description": "Get PCC for passport", "fee": 1500, "processing_time": "7-10 days"},

    # ===== Other services =====
    {"category": "marriage-certificate", "service_id": "A", "name": "Marriage Certificate",
     "description": "Register marriage and get certificate", "fee": 2000, "processing_time": "7-10 days"},
    {"category": "legal-heir-certificate", "service_id": "A", "name": "Legal Heir Certificate",
     "description": "Obtain legal heir certificate", "fee": 1500, "processing_time": "10-15 days"},
    {"category": "rti", "service_id": "A", "name": "RTI File Return",
     "description": "File and track RTI applications", "fee": 500, "processing_time": "15-20 days"},
    {"category": "gst-registration", "service_id": "A", "name": "GST Registration",
     "description": "Register for GST and compliance", "fee": 3000, "processing_time": "10-15 days"},
    {"category": "vehicle-challan", "service_id": "A", "name": "Pay Vehicle Challan",
     "description": "Pay traffic challans online", "fee": 100, "processing_time": "Instant"},
    {"category": "birth-certificate", "service_id": "A", "name": "Birth Certificate & All Common Services",
     "description": "Get birth certificate and other common services", "fee": 800, "processing_time": "7-10 days"},
    {"category": "insurance", "service_id": "A", "name": "All Type Insurance",
     "description": "Life, Health, Vehicle insurance services", "fee": 500, "processing_time": "3-5 days"},
    {"category": "visa", "service_id": "A", "name": "Visa Services",
     "description": "Visa application services", "fee": 5000, "processing_time": "15-30 days",
     "is_active": False},
]

DEMO_USERS = [
    {
        "full_name": "Admin User",
        "email": "admin@1point1solution.com",
        "phone": "9345678958",
        "password": "admin@123",
        "role": "admin",
    },
    {
        "full_name": "Test User",
        "email": "user@1point1solution.com",
        "phone": "8888888888",
        "password": "user123",
        "role": "user",
    },
]
