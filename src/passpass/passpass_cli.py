"""
passpass - a terminal password vault kept in a single encrypted file
"""
# ==============================================================
# Standard imports
# ==============================================================
import atexit
import enum
import logging
import sys

# ==============================================================
# Other imports
# ==============================================================
from passpass.config.config_vault import VAULT_FILE, VERSION, SEP_SM
from passpass.config.logging_config import setup_logging, timestamp
from passpass.utils.vault_utils import VaultStore
from passpass.utils.vault_errors import VaultError, RecordNotFoundError
from passpass.utils.user_input import read_label_val, prompt_passphrase, confirm_passphrase, get_int
from passpass.utils.clipboard_utils import copy_to_clipboard, reset_clipboard
from passpass.utils.password_generator import gen_password

logger = logging.getLogger(__name__)


class Command(enum.Enum):
    LIST = "l"
    ADD = "a"
    DELETE = "d"
    CHANGE = "c"
    QUIT = "q"


MENU_PROMPT = "(l)ist, (a)dd, (d)elete, (c)hange master password, (q)uit"

# ==============================================================
# Functions
# ==============================================================

def select_existing_entry(store: VaultStore) -> int | None:
    """
    Print all records and let the user pick one by its leading number.

    Returns:
        The selected index, or None if the vault is empty, the user
        cancelled, or the number does not exist.
    """
    listed = store.list_records()
    if not listed:
        print("No entries found in the database!")
        return None

    print("Select one of the following entries by typing the leading line number. Type 'c' to cancel.")
    for idx, site, username in listed:
        print(f"{idx:3d}: {site} ({username})")

    selection = get_int(" > ")
    if selection is None:
        return None
    if selection >= len(listed):
        print(f"   Invalid. Select 0 - {len(listed) - 1}")
        return None
    return selection


def show_entry(store: VaultStore) -> None:
    """Show site and username of a record, password goes to the clipboard."""
    idx = select_existing_entry(store)
    if idx is None:
        return

    record = store.get_record(idx)
    print()
    print("site:", record.site)
    print("username:", record.username)
    print()

    if copy_to_clipboard(store.reveal_password(idx)):
        print("The password was copied to the clipboard. "
              "Press enter to clear the password from the clipboard.")
        input()
        reset_clipboard()
    else:
        print("Clipboard unavailable. Password:")
        print(store.reveal_password(idx))
        print(SEP_SM)


def add_entry(store: VaultStore) -> None:
    """
    Add a record with a generated password.

    Passwords are generated into the clipboard until the user accepts one.
    """
    new_site = read_label_val("site")
    new_username = read_label_val("user")

    if store.has_record(new_site, new_username):
        print("That combination already exist, delete and recreate to change.")
        return

    while True:
        password = gen_password()
        if copy_to_clipboard(password):
            print("A new password was generated into the clipboard. "
                  "Try if the site accepts it.")
        else:
            print(f"Generated password: {password}")

        choice = read_label_val("pwd ok? (y/n)").strip().lower()
        if choice == "y":
            store.add_record(new_site, new_username, password)
            reset_clipboard()
            print("Entry saved.")
            return


def delete_entry(store: VaultStore) -> None:
    idx = select_existing_entry(store)
    if idx is None:
        return

    record = store.get_record(idx)
    store.delete_record(record.site, record.username)
    print(f"Deleted {record.site} ({record.username}).")


def change_password(store: VaultStore) -> None:
    """Prompt for current and new master password and re-encrypt the vault."""
    print("\n=== Change Master Password ===")
    current_pw = prompt_passphrase("current master password")
    new_pw = prompt_passphrase("new master password")
    confirm_pw = confirm_passphrase("repeat new master password")
    try:
        store.change_master_password(current_pw, new_pw, confirm_pw)
    finally:
        del current_pw, new_pw, confirm_pw
    print("Master password changed successfully!")


def confirm_new_vault(label: str) -> bytes:
    print("A database was not found. Please retype the password to create one.")
    return confirm_passphrase(label)


HANDLERS = {
    Command.LIST: show_entry,
    Command.ADD: add_entry,
    Command.DELETE: delete_entry,
    Command.CHANGE: change_password,
}


def pass_repl(store: VaultStore) -> None:
    """
    Read commands until the user quits.

    Vault errors are reported and the loop continues. End of input
    behaves like quit.
    """
    while True:
        try:
            choice = read_label_val(MENU_PROMPT).strip().lower()
        except EOFError:
            print()
            break

        try:
            command = Command(choice)
        except ValueError:
            print("Invalid Choice")
            continue

        if command is Command.QUIT:
            break

        try:
            HANDLERS[command](store)
        except RecordNotFoundError as e:
            print(f"Not found: {e}")
        except VaultError as e:
            print(f"Error: {e}")
        except EOFError:
            print()
            break


# ==============================================================
# MAIN
# ==============================================================
def main(path=None) -> None:
    setup_logging()
    print(f"- passpass {VERSION} -\n")

    store = VaultStore(path or VAULT_FILE, confirm=confirm_new_vault)

    try:
        store.unlock(prompt_passphrase("master password"))
    except VaultError as e:
        logger.error(f"[{timestamp()}] {type(e).__name__}: {e}\n")
        print(e, file=sys.stderr)
        sys.exit(1)

    # clears clipboard on exit
    atexit.register(reset_clipboard)

    pass_repl(store)
    store.lock()
    print("Goodbye!")


if __name__ == "__main__":
    main()
