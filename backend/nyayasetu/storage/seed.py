"""Initial data for a fresh store

Reference data (practice areas, locations) is loaded whenever the store has
none. Demo accounts (advocates, clients, a few reviews) are loaded only when
the store has no users and demo seeding is enabled.
"""
import logging
from typing import Callable

from .base import Storage

logger = logging.getLogger(__name__)

DEMO_PASSWORD = "password123"
DEMO_IMAGE_URL = "/assets/advocate-placeholder.svg"

PRACTICE_AREAS = [
    "Criminal Law",
    "Family Law",
    "Constitutional Law",
    "Corporate Law",
    "Property Law",
    "Civil Law",
    "Tax Law",
    "Intellectual Property",
    "Divorce",
    "Child Custody",
    "Human Rights",
    "Public Interest",
    "Mergers & Acquisitions",
    "Startups",
    "Technology",
    "Civil Disputes",
    "Contracts",
]

LOCATIONS = [
    ("New Delhi", "Delhi", "110001"),
    ("South Delhi", "Delhi", "110025"),
    ("East Delhi", "Delhi", "110091"),
    ("West Delhi", "Delhi", "110063"),
    ("North Delhi", "Delhi", "110007"),
    ("Patna", "Bihar", "800001"),
    ("Gaya", "Bihar", "823001"),
    ("Muzaffarpur", "Bihar", "842001"),
    ("Bhagalpur", "Bihar", "812001"),
    ("Darbhanga", "Bihar", "846004"),
    ("Purnia", "Bihar", "854301"),
    ("Arrah", "Bihar", "802301"),
    ("Katihar", "Bihar", "854105"),
    ("Chapra", "Bihar", "841301"),
    ("Ranchi", "Jharkhand", "834001"),
    ("Jamshedpur", "Jharkhand", "831001"),
    ("Dhanbad", "Jharkhand", "826001"),
    ("Bokaro", "Jharkhand", "827001"),
    ("Deoghar", "Jharkhand", "814112"),
    ("Hazaribagh", "Jharkhand", "825301"),
    ("Giridih", "Jharkhand", "815301"),
    ("Mumbai", "Maharashtra", "400001"),
    ("Bangalore", "Karnataka", "560001"),
    ("Chennai", "Tamil Nadu", "600001"),
    ("Kolkata", "West Bengal", "700001"),
    ("Hyderabad", "Telangana", "500001"),
]

# (username, phone, city, experience, bar council number, specialties, bio)
DEMO_ADVOCATES = [
    ("adv1", "9876543210", "New Delhi", 15, "DL/123/2005",
     ["Criminal Law", "Constitutional Law", "Corporate Law"],
     "Over 15 years of experience in criminal defense and corporate legal matters. "
     "Former additional solicitor at Delhi High Court."),
    ("adv2", "8765432109", "Mumbai", 12, "MH/456/2010",
     ["Family Law", "Divorce", "Child Custody"],
     "Specializing in family law matters with compassionate representation. "
     "Expert in divorce, child custody, and domestic relations."),
    ("adv3", "7654321098", "Bangalore", 9, "KA/789/2013",
     ["Intellectual Property", "Startups", "Technology"],
     "Tech law specialist with expertise in intellectual property, startups, and technology "
     "regulations. Former legal counsel at major tech firms."),
    ("adv4", "6543210987", "Kolkata", 11, "WB/234/2012",
     ["Property Law", "Civil Disputes", "Contracts"],
     "Experienced in property law and civil disputes. Specializes in property documentation, "
     "tenant disputes, and inheritance cases."),
    ("advocate5", "5432109876", "Chennai", 18, "TN/567/2004",
     ["Corporate Law", "Tax Law", "Mergers & Acquisitions"],
     "Corporate law expert with extensive experience in mergers, acquisitions, and business "
     "restructuring. Former partner at a top law firm."),
    ("advocate6", "4321098765", "Hyderabad", 10, "TS/890/2013",
     ["Human Rights", "Constitutional Law", "Public Interest"],
     "Passionate human rights advocate with expertise in constitutional law and public interest "
     "litigation. Worked with several NGOs."),
    ("advocate7", "9876543211", "Patna", 12, "BR/234/2011",
     ["Criminal Law", "Constitutional Law", "Human Rights"],
     "Expert in criminal law with over 12 years of experience handling high-profile cases in "
     "Patna High Court. Specializes in criminal defense and appeals."),
    ("advocate8", "8765432110", "Ranchi", 14, "JH/456/2010",
     ["Property Law", "Human Rights", "Public Interest"],
     "Tribal rights and environmental law expert with extensive experience in Jharkhand. "
     "Specializes in land rights cases and environmental litigation."),
    ("advocate9", "7654321109", "Gaya", 8, "BR/567/2015",
     ["Family Law", "Divorce", "Child Custody"],
     "Family law advocate with deep understanding of matrimonial matters. Offers compassionate "
     "guidance in divorce, maintenance, and child custody cases."),
    ("advocate10", "6543210986", "Jamshedpur", 9, "JH/789/2014",
     ["Corporate Law", "Civil Law", "Contracts"],
     "Corporate and business law expert with experience in industrial disputes. Specializes in "
     "labor law and corporate contracts for industrial clients."),
    ("advocate11", "8765432111", "Muzaffarpur", 16, "BR/123/2008",
     ["Criminal Law", "Constitutional Law", "Civil Law"],
     "Criminal defense lawyer with expertise in bail applications and trial advocacy. Handles "
     "criminal cases at all levels of courts in Bihar."),
    ("advocate12", "7654321108", "Dhanbad", 11, "JH/345/2012",
     ["Human Rights", "Civil Law", "Contracts"],
     "Mining and environmental law expert with experience in workers' compensation cases. "
     "Specializes in mining regulations and labor rights."),
    ("advocate13", "9876543212", "South Delhi", 14, "DL/456/2009",
     ["Intellectual Property", "Startups", "Corporate Law"],
     "Specialized in intellectual property law with experience in patent litigation and "
     "copyright disputes. Previously worked at a top-tier IP firm."),
    ("advocate14", "8765432112", "East Delhi", 12, "DL/789/2011",
     ["Family Law", "Divorce", "Child Custody"],
     "Family law expert with compassionate approach to divorce and child custody cases. "
     "Mediator certified by Delhi Mediation Centre."),
    ("advocate15", "9876543213", "Darbhanga", 17, "BR/345/2006",
     ["Criminal Law", "Constitutional Law", "Civil Law"],
     "Criminal defense specialist with extensive experience in Bihar courts. Expert in bail "
     "applications and criminal trials."),
    ("advocate16", "8765432113", "Purnia", 13, "BR/567/2010",
     ["Property Law", "Civil Disputes", "Contracts"],
     "Land law specialist focusing on property disputes, agricultural land cases, and property "
     "documentation in North Bihar."),
    ("advocate17", "9876543214", "Bokaro", 15, "JH/123/2008",
     ["Human Rights", "Civil Law", "Contracts"],
     "Labor law expert with experience in industrial disputes, factory workers' rights, and "
     "employment contracts in industrial belt of Jharkhand."),
    ("advocate18", "8765432114", "Hazaribagh", 11, "JH/456/2012",
     ["Human Rights", "Constitutional Law", "Public Interest"],
     "Tribal rights advocate with expertise in forest rights, land acquisition cases, and "
     "representation of tribal communities in legal disputes."),
]

DEMO_CLIENTS = [
    ("client1", "client1@example.com", "Test Client", "9999999999"),
    ("rahul.kumar", "rahul.kumar@example.com", "Rahul Kumar", "8888888888"),
    ("meera.singh", "meera.singh@example.com", "Meera Singh", "7777777777"),
]

# (client username, advocate username, rating, content)
DEMO_REVIEWS = [
    ("client1", "adv1", 5, "Clear advice on my bail application and quick follow-up."),
    ("rahul.kumar", "adv1", 4, "Knowledgeable and patient."),
    ("meera.singh", "adv2", 5, "Handled my custody matter with great care."),
    ("client1", "adv3", 4, "Helped us register our startup's trademark."),
    ("rahul.kumar", "advocate7", 5, "Very experienced with Patna High Court procedure."),
]


async def seed_reference_data(storage: Storage) -> bool:
    """Load practice areas and locations into an empty store"""
    if await storage.get_all_practice_areas() or await storage.get_all_locations():
        logger.info("Reference data already present, skipping")
        return False
    for name in PRACTICE_AREAS:
        await storage.create_practice_area(name=name)
    for city, state, pincode in LOCATIONS:
        await storage.create_location(city=city, state=state, pincode=pincode)
    logger.info("Seeded %d practice areas and %d locations", len(PRACTICE_AREAS), len(LOCATIONS))
    return True


async def seed_demo_accounts(storage: Storage, password_hasher: Callable[[str], str]) -> bool:
    """Load demo advocates, clients and reviews into a store without users"""
    if await storage.count_users() > 0:
        logger.info("Users already present, skipping demo accounts")
        return False

    areas = {area.name: area.id for area in await storage.get_all_practice_areas()}
    cities = {loc.city: loc.id for loc in await storage.get_all_locations()}
    password = password_hasher(DEMO_PASSWORD)
    advocate_ids: dict[str, str] = {}
    user_ids: dict[str, str] = {}

    for number, (username, phone, city, experience, bar_number, specialties, bio) in enumerate(
        DEMO_ADVOCATES, start=1
    ):
        location_id = cities.get(city)
        if location_id is None:
            logger.warning("Demo advocate %s skipped: unknown city %s", username, city)
            continue
        user = await storage.create_user(
            username=username,
            password=password,
            email=f"advocate{number}@example.com",
            full_name=f"Advocate {number}",
            phone=phone,
            role="advocate",
        )
        advocate = await storage.create_advocate(
            user_id=user.id,
            location_id=location_id,
            bio=bio,
            experience=experience,
            bar_council_number=bar_number,
            image_url=DEMO_IMAGE_URL,
            verified=True,
        )
        for name in specialties:
            if name in areas:
                await storage.add_specialty_to_advocate(advocate.id, areas[name])
        advocate_ids[username] = advocate.id

    for username, email, full_name, phone in DEMO_CLIENTS:
        user = await storage.create_user(
            username=username,
            password=password,
            email=email,
            full_name=full_name,
            phone=phone,
            role="client",
        )
        user_ids[username] = user.id

    for client, advocate, rating, content in DEMO_REVIEWS:
        if client in user_ids and advocate in advocate_ids:
            await storage.create_review(
                advocate_id=advocate_ids[advocate],
                user_id=user_ids[client],
                rating=rating,
                content=content,
            )

    logger.info("Seeded %d demo advocates and %d demo clients", len(advocate_ids), len(user_ids))
    return True
