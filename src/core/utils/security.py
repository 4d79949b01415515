import hmac


def plain_passwords_match(presented: str, stored: str) -> bool:
    """
    Compare a presented password with the stored one.

    Passwords are kept as plain strings, so this is an exact comparison done in
    constant time. Swap it for a hash verifier once a hashing scheme is chosen.

    :param presented: The password sent by the client.
    :param stored: The password kept in the user record.
    :return: True when both strings are identical.
    """
    return hmac.compare_digest(presented.encode("utf-8"), stored.encode("utf-8"))


def mask_login(login: str) -> str:
    """
    Masks a login for log output.
    Mask pattern: ab***  (or ab***@cd*** for e-mail shaped logins)
    """
    if not login:
        return "***"
    if "@" in login:
        local, domain = login.split("@", 1)
        masked_local = (local[:2] + "***") if local else "*****"
        masked_domain = (domain[:2] + "***") if domain else "*****"
        return f"{masked_local}@{masked_domain}"
    return login[:2] + "***"
