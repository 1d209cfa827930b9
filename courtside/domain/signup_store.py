"""Onboarding form state collected before the basic-info registration call."""
from typing import Any, Dict

from courtside.data.draft import DraftStaging
from courtside.domain.base_store import DomainStore


def default_signup_form() -> Dict[str, Any]:
    return {
        "first_name": "",
        "last_name": "",
        "email": "",
        "contact": "",
        "city": "",
        "dob": "",
    }


class SignUpStore(DomainStore):
    """Draft-only store: nothing here is committed until the form is taken."""

    name = "signup"

    def __init__(self):
        super().__init__()
        self.draft = DraftStaging("signup", default_signup_form)

    @property
    def form(self) -> Dict[str, Any]:
        return self.draft.value

    def set_first_name(self, name: str) -> None:
        self._set("first_name", name)

    def set_last_name(self, name: str) -> None:
        self._set("last_name", name)

    def set_email(self, email: str) -> None:
        self._set("email", email)

    def set_contact(self, contact: str) -> None:
        self._set("contact", contact)

    def set_city(self, city: str) -> None:
        self._set("city", city)

    def set_dob(self, dob: str) -> None:
        self._set("dob", dob)

    def reset(self) -> None:
        self.draft.reset()
        self._notify()

    def take_payload(self) -> Dict[str, str]:
        """
        Hand the form over as a basic-info registration body and clear it.

        Returns:
            Dict[str, str]: Body keyed the way the onboarding endpoint expects
        """
        form = self.draft.take()
        self._notify()
        return {
            "firstname": form["first_name"],
            "lastname": form["last_name"],
            "dob": form["dob"],
            "city": form["city"],
            "contact": form["contact"],
            "email": form["email"],
        }

    def _set(self, field: str, value: str) -> None:
        self.draft.update(**{field: value})
        self._notify()
