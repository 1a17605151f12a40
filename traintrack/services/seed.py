"""Reference data inserted into empty tables: roles, licences, units and machine categories."""

import logging
from decimal import Decimal

from sqlalchemy.orm import Session

from traintrack.models import Licence, MachineCategory, Role, Unit
from traintrack.services.permissions import Role as RoleName

logger = logging.getLogger(__name__)

# (name, max_machines, monthly price)
LICENCES = (
    ("basic", 20, Decimal("50.00")),
    ("premium", 50, Decimal("100.00")),
    ("enterprise", 2000, Decimal("300.00")),
)

UNITS = (
    "Kilograms (Kg)",
    "Pounds (lbs)",
    "Miles",
    "Kilometers (Km)",
    "Meters (m)",
    "Centimeters (cm)",
    "Inches (in)",
    "Calories",
    "Heart Rate (beats per minute)",
    "Watts (W)",
    "Time (seconds, minutes, hours)",
    "Percentage of 1RM (%1RM)",
    "Body Mass Index (BMI)",
    "Body Fat Percentage (%)",
    "Lean Body Mass (Kg or lbs)",
    "Waist to Hip Ratio",
    "Circumferences (cm or in)",
    "Degrees (°)",
    "VO2 Max (ml/kg/min)",
    "Pace (minutes per km or mile)",
    "Stroke Rate (strokes per minute)",
    "Newton Meters (Nm)",
    "Pound-Feet (lb-ft)",
    "Velocity (m/s)",
    "Work to Rest Ratio",
    "Intervals",
    "Repetitions",
    "Sets",
)

MACHINE_CATEGORIES = (
    "Bench Press Stations",
    "Dumbbells",
    "Cable Towers",
    "Squat Racks",
    "Leg Press Machines",
    "Smith Machines",
    "Pull-Up Bars",
    "Kettlebells",
    "Barbells",
    "Lat Pulldown Machines",
    "Leg Curl Machines",
    "Chest Fly Machines",
    "Shoulder Press Machines",
    "Leg Extension Machines",
    "Abdominal Crunch Machines",
    "Hyperextension Benches",
    "Preacher Curl Benches",
    "Roman Chairs",
    "Calf Machines",
    "Plate-Loaded Machines",
    "Functional Trainers",
    "Medicine Balls",
    "Plyo Boxes",
    "Battle Ropes",
    "Spin Bikes",
    "Rowing Machines",
    "Elliptical Trainers",
    "Treadmills",
    "Stair Climbers",
    "Recumbent Bikes",
    "Upright Bikes",
    "Vibration Platforms",
    "Suspension Trainers",
    "Climbing Ropes",
    "Gymnastic Rings",
    "Sandbags",
    "Resistance Bands",
    "Foam Rollers",
)


def seed_roles(db: Session) -> int:
    if db.query(Role).count():
        logger.info("Roles already exist, skipping seeding.")
        return 0
    db.add_all(Role(name=role.value) for role in RoleName)
    db.commit()
    logger.info("Roles seeded successfully.")
    return len(RoleName)


def seed_licences(db: Session) -> int:
    if db.query(Licence).count():
        logger.info("Licences already exist, skipping seeding.")
        return 0
    db.add_all(
        Licence(name=name, max_machines=max_machines, price=price)
        for name, max_machines, price in LICENCES
    )
    db.commit()
    logger.info("Licences seeded successfully.")
    return len(LICENCES)


def seed_units(db: Session) -> int:
    if db.query(Unit).count():
        logger.info("Units already exist, skipping seeding.")
        return 0
    db.add_all(Unit(name=name) for name in UNITS)
    db.commit()
    logger.info("Units seeded successfully.")
    return len(UNITS)


def seed_machine_categories(db: Session) -> int:
    if db.query(MachineCategory).count():
        logger.info("Machine categories already exist, skipping seeding.")
        return 0
    db.add_all(MachineCategory(name=name) for name in MACHINE_CATEGORIES)
    db.commit()
    logger.info("Machine categories seeded successfully.")
    return len(MACHINE_CATEGORIES)


def seed_all(db: Session) -> dict[str, int]:
    """Run every seeder; returns rows inserted per table. Idempotent."""
    return {
        "roles": seed_roles(db),
        "licences": seed_licences(db),
        "units": seed_units(db),
        "machine_categories": seed_machine_categories(db),
    }
