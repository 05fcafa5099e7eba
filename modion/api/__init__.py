from dotenv import load_dotenv

# Environment must be populated before auth_utils and deps read it.
load_dotenv()
