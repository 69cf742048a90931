# create_admin.py
import logging
from getpass import getpass # For securely getting password input

from jobboard.db.database import Session, prepare_database
from jobboard.db.seed import create_admin, seed_lookups, seed_rbac

# Configure basic logging
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
log = logging.getLogger(__name__)


def prompt_credentials():
    username = input("Enter username for the new admin: ").strip()
    if not username:
        log.error("Username cannot be empty.")
        return None

    email = input("Enter email for the new admin: ").strip()
    if not email:
        log.error("Email cannot be empty.")
        return None

    while True:
        password = getpass("Enter a strong temporary password for the new admin: ")
        password_confirm = getpass("Confirm the password: ")
        if password != password_confirm:
            log.warning("Passwords do not match. Please try again.")
        elif not password:
            log.warning("Password cannot be empty. Please try again.")
        else:
            return username, email, password


def main():
    log.info("--- Admin User Creation Script ---")
    prepare_database()
    try:
        credentials = prompt_credentials()
        if credentials is None:
            return 1
        username, email, password = credentials
        with Session() as session:
            seed_rbac(session)
            seed_lookups(session)
            admin = create_admin(session, username, email, password)
            log.info("--- Successfully created new admin user ---")
            log.info(f"  ID:       {admin.id}")
            log.info(f"  Username: {admin.username}")
            log.info(f"  Email:    {admin.email}")
            log.warning("IMPORTANT: Log in and change this temporary password with the changePassword mutation.")
    except ValueError as ve:
        log.error(f"Input validation failed: {ve}")
        return 1
    except KeyboardInterrupt:
        log.info("\nAdmin creation process cancelled by user.")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
