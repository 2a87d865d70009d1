from __future__ import annotations

from enum import Enum


class StaffRole(str, Enum):
    """Staff categories offered on the registration form."""

    TEACHING = "teaching"
    ADMIN_STAFF = "admin-staff"
    GROUP_C = "group-c"
    PEON = "peon"
    HOSTEL_WARDEN_MALE = "hostel-warden-male"
    HOSTEL_WARDEN_FEMALE = "hostel-warden-female"
    HOSTEL_NURSE = "hostel-nurse"

    @property
    def label(self) -> str:
        return STAFF_ROLE_LABELS[self]

    @property
    def id_prefix(self) -> str:
        # "hostel-warden-male" -> "HOSTE"
        return self.value.split("-")[0][:5].upper()


STAFF_ROLE_LABELS = {
    StaffRole.TEACHING: "Teaching Staff",
    StaffRole.ADMIN_STAFF: "Admin Staff",
    StaffRole.GROUP_C: "Group C Staff",
    StaffRole.PEON: "Peon Staff",
    StaffRole.HOSTEL_WARDEN_MALE: "Hostel Staff (Warden Male)",
    StaffRole.HOSTEL_WARDEN_FEMALE: "Hostel Staff (Warden Female)",
    StaffRole.HOSTEL_NURSE: "Hostel Staff (Nurse)",
}


class PortalRole(str, Enum):
    """Who is logged into the current session."""

    STAFF = "staff"
    ADMIN = "admin"
    VICE_PRINCIPAL = "vice_principal"
