# whogotpwned/database/sample_data.py
# Demo dataset loaded by the memory store and seeded into an empty MongoDB.

SAMPLE_BREACHES = {
    "test@example.com": [
        {
            "breachName": "Adobe Breach 2013",
            "domain": "adobe.com",
            "breachDate": "2013-10-04",
            "compromisedData": ["email", "password", "username"],
            "severity": "high",
            "description": "153 million user records exposed including email addresses and encrypted passwords",
            "source": "sample",
        },
        {
            "breachName": "LinkedIn Breach 2012",
            "domain": "linkedin.com",
            "breachDate": "2012-06-05",
            "compromisedData": ["email", "password"],
            "severity": "high",
            "description": "165 million email and password combinations exposed",
            "source": "sample",
        },
    ],
    "user@gmail.com": [
        {
            "breachName": "Yahoo Breach 2013",
            "domain": "yahoo.com",
            "breachDate": "2013-08-01",
            "compromisedData": ["email", "password", "username", "phone"],
            "severity": "high",
            "description": "3 billion accounts compromised in one of the largest breaches in history",
            "source": "sample",
        },
    ],
    "compromised@yahoo.com": [
        {
            "breachName": "Yahoo Breach 2013",
            "domain": "yahoo.com",
            "breachDate": "2013-08-01",
            "compromisedData": ["email", "password", "username"],
            "severity": "high",
            "source": "sample",
        },
    ],
    "hacked@gmail.com": [
        {
            "breachName": "Facebook Breach 2019",
            "domain": "facebook.com",
            "breachDate": "2019-09-01",
            "compromisedData": ["email", "phone", "username"],
            "severity": "medium",
            "description": "533 million users had phone numbers and personal data exposed",
            "source": "sample",
        },
    ],
    "breached@hotmail.com": [
        {
            "breachName": "Microsoft Hotmail Leak 2019",
            "domain": "hotmail.com",
            "breachDate": "2019-12-01",
            "compromisedData": ["email"],
            "severity": "low",
            "description": "Email addresses exposed in configuration error",
            "source": "sample",
        },
    ],
    "leaked@protonmail.com": [
        {
            "breachName": "Data Aggregator Leak 2021",
            "domain": "multiple",
            "breachDate": "2021-03-15",
            "compromisedData": ["email", "phone", "address"],
            "severity": "medium",
            "description": "Personal data collected from multiple sources and sold online",
            "source": "sample",
        },
    ],
    "pwned@outlook.com": [
        {
            "breachName": "Social Media Scrape 2022",
            "domain": "social-media.com",
            "breachDate": "2022-07-20",
            "compromisedData": ["email", "username"],
            "severity": "low",
            "description": "Data scraped from social media platforms",
            "source": "sample",
        },
    ],
}

SAFE_EMAILS = [
    "safe@example.com",
    "secure@gmail.com",
    "protected@yahoo.com",
    "private@outlook.com",
]

# Pre-populated email_checks documents
SAMPLE_CHECKS = [
    {
        "email": "test@example.com",
        "isBreached": True,
        "breaches": [
            {"name": "Adobe Breach 2013", "domain": "adobe.com", "breachDate": "2013-10-04", "severity": "high"},
            {"name": "LinkedIn Breach 2012", "domain": "linkedin.com", "breachDate": "2012-06-05", "severity": "high"},
        ],
        "checkSource": "import",
    },
    {
        "email": "safe@example.com",
        "isBreached": False,
        "breaches": [],
        "checkSource": "manual",
    },
]
