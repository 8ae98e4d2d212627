from pathlib import Path

# Global Config (set by services.file_manager.init_paths)
BASE_FOLDER = None
DATA_FILE = None
CARDS_FOLDER = None
CONFIG_FILE = Path.home() / ".gym_members_config"

DATA_FILE_NAME = "gym_members.txt"
DEFAULT_FOLDER_NAME = "Gym Members"

GYM_NAME = "GYM MEMBER DESK"

# Regular membership plans and their prices
PLAN_PRICES = {
    "Basic": 6500.0,
    "Standard": 12500.0,
    "Deluxe": 18500.0,
}
DEFAULT_PLAN = "Basic"

# Attendances a regular member needs before a plan upgrade
ATTENDANCE_LIMIT = 30

# Total fee a premium member pays in full
PREMIUM_CHARGE = 50000.0

# Loyalty points per attendance mark
REGULAR_LOYALTY_POINTS = 5
PREMIUM_LOYALTY_POINTS = 10

# Share of the premium charge given back once fully paid (1%)
DISCOUNT_RATE = 0.01
