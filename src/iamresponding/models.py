"""Typed records for IamResponding API payloads.

Field aliases are the vendor's JSON names and must not change. Python
attribute names are the snake_case equivalents. Missing or ``null`` keys fall
back to zero values (``0``, ``""``, ``False``, ``None``) instead of failing
validation; unknown keys are ignored. Present values must already have the
field's JSON type: strings are not turned into numbers or booleans.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_serializer, model_validator


class WireModel(BaseModel):
    """Base for every record decoded from or encoded to the vendor API."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", strict=True)

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if data is None:
            return {}
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


# =============================================================================
# Login (JSON protocol)
# =============================================================================


class LoginRequest(WireModel):
    member_login: bool = Field(True, alias="memberLogin")
    agency: str = Field("", alias="agencyName")
    user: str = Field("", alias="memberfname")
    password: str = Field("", alias="memberpwd", repr=False)
    url_to: str = Field("", alias="urlTo")
    remember_me: bool = Field(False, alias="rememberPwd")
    override_session: bool = Field(False, alias="overrideSession")


class LoginReply(WireModel):
    message: str = Field("", alias="d")


# =============================================================================
# Subscriber / member
# =============================================================================


class Location(WireModel):
    lat: float = 0.0
    lng: float = 0.0


class SubscriberInfo(WireModel):
    """The agency account the logged-in member belongs to."""

    subscriber_id: int = Field(0, alias="subscriberId")
    status_id: int = Field(0, alias="statusID")
    name: str = ""
    time_zone: int = Field(0, alias="timeZone")
    assigned_phone: str = Field("", alias="assignedPhone")
    additional_phone: str = Field("", alias="additionalPhone")
    location: Location = Field(default_factory=Location)
    enable_email_input: bool = Field(False, alias="enableEmailInput")
    logo_image: str = Field("", alias="logoImage")
    screen_name: str = Field("", alias="screenName")
    country: str = ""
    country_code: str = Field("", alias="countryCode")
    telephone_key_entries1: str = Field("", alias="telephoneKeyEntries1")
    telephone_key_entries2: str = Field("", alias="telephoneKeyEntries2")
    telephone_key_entries3: str = Field("", alias="telephoneKeyEntries3")
    telephone_key_entries4: str = Field("", alias="telephoneKeyEntries4")
    telephone_key_entries5: str = Field("", alias="telephoneKeyEntries5")
    telephone_key_entries6: str = Field("", alias="telephoneKeyEntries6")
    telephone_key_entries7: str = Field("", alias="telephoneKeyEntries7")
    telephone_key_entries8: str = Field("", alias="telephoneKeyEntries8")
    telephone_key_entries9: str = Field("", alias="telephoneKeyEntries9")
    telephone_key_entries_def: str = Field("", alias="telephoneKeyEntriesDef")
    auto_clear: bool = Field(False, alias="autoClear")
    minutes_to_clear_eta_expired: int = Field(0, alias="minutesToClearEtaExpired")
    max_time_in_toggle_view: int = Field(0, alias="maxTimeInToggleView")
    city: str = ""
    state: str = ""
    enable_digital_dashboard: bool = Field(False, alias="enableDigitalDashboard")
    current_date: str = Field("", alias="currentDate")
    current_time: str = Field("", alias="currentTime")
    toggle_in_dashboard: bool = Field(False, alias="toggleInDashboard")
    time_zone_id: int = Field(0, alias="timeZoneId")
    is_affected_by_dst_change: bool = Field(False, alias="isAffectedByDstChange")
    old_time_zone_id: int = Field(0, alias="oldTimeZoneId")
    old_is_affected_by_dst_change: bool = Field(False, alias="oldIsAffectedByDstChange")
    enable_legacy_dashboard: bool = Field(False, alias="enableLegacyDashboard")
    emailaddr: str = ""
    is_active: bool = Field(False, alias="isActive")
    name_for_dispatcher_use: str = Field("", alias="nameForDispatcherUse")
    ttd_toggle_in_dashboard: bool = Field(False, alias="ttdToggleInDashboard")
    allow_special_shifts: bool = Field(False, alias="allowSpecialShifts")


class MemberInfo(WireModel):
    """Profile and permissions of the logged-in member."""

    member_id: int = Field(0, alias="memberId")
    subscriber_id: int = Field(0, alias="subscriberId")
    first_name: str = Field("", alias="firstName")
    last_name: str = Field("", alias="lastName")
    profile_image: str = Field("", alias="profileImage")
    max_time_emergency_mode: int = Field(0, alias="maxTimeEmergencyMode")
    clear_now: bool = Field(False, alias="clearNow")
    color_border: int = Field(0, alias="colorBorder")
    can_edit_own_schedule: bool = Field(False, alias="canEditOwnSchedule")
    can_edit_all_schedules: bool = Field(False, alias="canEditAllSchedules")
    allow_own_pcf_scheduling: bool = Field(False, alias="allowOwnPCFScheduling")
    allow_own_cf_scheduling: bool = Field(False, alias="allowOwnCFScheduling")
    can_manage_events: bool = Field(False, alias="canManageEvents")
    allow_manage_hydrants: bool = Field(False, alias="allowManageHydrants")
    allow_delete_hydrants: bool = Field(False, alias="allowDeleteHydrants")
    allow_manage_markers: bool = Field(False, alias="allowManageMarkers")
    allow_delete_markers: bool = Field(False, alias="allowDeleteMarkers")
    permitted_to_verify_incident_addresses: bool = Field(
        False, alias="permittedToVerifyIncidentAddresses"
    )
    permitted_to_create_geofence: bool = Field(False, alias="permittedToCreateGeofence")
    default_respond_now: str = Field("", alias="defaultRespondNow")
    position: str = ""
    reminder_shifts: str = Field("", alias="reminderShifts")
    position_id: int = Field(0, alias="positionId")
    allow_toggle_emergency_dd: bool = Field(False, alias="allowToggleEmergencyDD")
    allow_edit_own_profile: bool = Field(False, alias="allowEditOwnProfile")
    permitted_change_page6: bool = Field(False, alias="permittedChangePage6")
    allow_edit_scroll_message: bool = Field(False, alias="allowEditScrollMessage")
    default_location: str = Field("", alias="defaultLocation")
    default_category: int = Field(0, alias="defaultCategory")
    default_shift_duration: int = Field(0, alias="defaultShiftDuration")
    do_not_disturb: int = Field(0, alias="doNotDisturb")
    do_not_disturb_start_time: str = Field("", alias="doNotDisturbStartTime")
    do_not_disturb_finish_time: str = Field("", alias="doNotDisturbFinishTime")
    text_message_address_dnd: bool = Field(False, alias="textMessageAddressDND")
    app_push_notifications_dnd: bool = Field(False, alias="appPushNotificationsDND")
    do_not_disturb_device: bool = Field(False, alias="doNotDisturbDevice")
    # shape not documented by the vendor
    device_token: Any = Field(None, alias="deviceToken")
    device_active: bool = Field(False, alias="deviceActive")
    member_email: str = Field("", alias="memberEmail")
    secondary_email: str = Field("", alias="secondaryEmail")
    text_member_address: str = Field("", alias="textMemberAddress")


# =============================================================================
# Incidents and messages
# =============================================================================


class Incident(WireModel):
    id: int = 0
    arrived_on: str = Field("", alias="arrivedOn")
    message_body: str = Field("", alias="messageBody")
    destination_email_address: str = Field("", alias="destinationEmailAddress")
    origination_email_address: str = Field("", alias="originationEmailAddress")
    subscriber_id: int = Field(0, alias="subscriberId")
    verified_address_status: int = Field(0, alias="verifiedAddressStatus")
    arrived_on_string: str = Field("", alias="arrivedOnString")
    index: int = 0
    address: str = ""
    location: str = ""
    direction: Any = None
    verified_street_number: str = Field("", alias="verifiedStreetNumber")
    verified_street_name: str = Field("", alias="verifiedStreetName")
    verified_city: str = Field("", alias="verifiedCity")
    verified_state: str = Field("", alias="verifiedState")
    verified_country: str = Field("", alias="verifiedCountry")
    long_direction: str = Field("", alias="longDirection")
    # vendor spelling
    has_coordinates_in_body: bool = Field(False, alias="hasCoordinatesInBoddy")
    is_verified_and_active: bool = Field(False, alias="isVerifiedAndActive")
    added_by: Any = Field(None, alias="addedBy")
    added_on: str = Field("", alias="addedOn")
    last_updated_by: Any = Field(None, alias="lastUpdatedBy")
    updated_on: str = Field("", alias="updatedOn")
    time_zone_id: int = Field(0, alias="timeZoneId")
    is_dst: bool = Field(False, alias="isDst")


class Message(WireModel):
    id: str = ""
    message_id: int = Field(0, alias="messageId")
    subscriber_id: int = Field(0, alias="subscriberId")
    message: str = ""
    created_date: datetime | None = Field(None, alias="createdDate", strict=False)


# =============================================================================
# Dispatchers and codes
# =============================================================================


class Dispatcher(WireModel):
    centralized_id: int = Field(0, alias="centralizedId")
    dispatcher_id: int = Field(0, alias="dispatcherId")
    dispatcher_name: str = Field("", alias="dispatcherName")


class Dispatchers(WireModel):
    subscriber_id: int = Field(0, alias="subscriberId")
    dispatchers: list[Dispatcher] = Field(default_factory=list)


class ResponderCode(WireModel):
    id: int = 0
    subscriber_id: int = Field(0, alias="subscriberId")
    key_entry: str = Field("", alias="keyEntry")
    status_for_tracking: bool = Field(False, alias="statusForTracking")
    is_telephone_key: bool = Field(False, alias="isTelephoneKey")
    is_default_key: bool = Field(False, alias="isDefaultKey")
    custom_sort_order: int = Field(0, alias="customSortOrder")


class ResponderCodes(WireModel):
    response_codes: list[ResponderCode] = Field(default_factory=list, alias="responseCodes")
    telephone_keys: list[ResponderCode] = Field(default_factory=list, alias="telephoneKeys")


class OnDutyAtCode(WireModel):
    id: str = ""
    subscriber_id: int = Field(0, alias="subscriberId")
    key_entry: str = Field("", alias="keyEntry")


# =============================================================================
# Responders and apparatus
# =============================================================================


class Responder(WireModel):
    """A member's live response to the current incident."""

    id: str = ""
    name: str = ""
    position: str = ""
    responding_to: str = Field("", alias="respondingTo")
    # timestamps arrive as ISO 8601 strings
    called_at: datetime | None = Field(None, alias="calledAt", strict=False)
    eta_before: datetime | None = Field(None, alias="etaBefore", strict=False)
    last_name: str = Field("", alias="lastName")
    is_mutual_aid: bool = Field(False, alias="isMutualAid")
    subscriber_name: str = Field("", alias="subscriberName")
    subscriber_id: int = Field(0, alias="subscriberId")
    order: int = 0
    image_url: str = Field("", alias="imageUrl")
    color_border: int = Field(0, alias="colorBorder")
    member_id: int = Field(0, alias="memberId")
    expired: datetime | None = Field(None, strict=False)
    time_zone_id: int = Field(0, alias="timeZoneId")
    is_dst: bool = Field(False, alias="isDst")
    response_code_id: int = Field(0, alias="responseCodeId")


class Apparatus(BaseModel):
    """Apparatus entry of undocumented shape.

    Every key the vendor sends is kept verbatim, ``null`` values included.
    """

    model_config = ConfigDict(extra="allow")

    @model_validator(mode="before")
    @classmethod
    def _null_is_empty(cls, data: Any) -> Any:
        return {} if data is None else data

    @property
    def attributes(self) -> dict[str, Any]:
        return dict(self.model_extra or {})


IncidentList = list[Incident]
MessageList = list[Message]
ResponderList = list[Responder]
OnDutyAtCodeList = list[OnDutyAtCode]
ApparatusList = list[Apparatus]


# =============================================================================
# Search
# =============================================================================


def _wire_date(value: date) -> str:
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


class IncidentSearchRequest(BaseModel):
    """Date-range incident search, one page at a time.

    ``page`` and ``page_size`` are stored as given; values below 1 become
    ``1`` and ``100`` only when the request is serialized.
    """

    start_time: datetime | date
    end_time: datetime | date
    page_size: int = 0
    page: int = 0

    def to_payload(self) -> dict[str, Any]:
        return {
            "startDate": _wire_date(self.start_time),
            "endDate": _wire_date(self.end_time),
            "loading": False,
            "submit": True,
            "page": self.page if self.page >= 1 else 1,
            "pageSize": self.page_size if self.page_size >= 1 else 100,
        }

    @model_serializer
    def _serialize(self) -> dict[str, Any]:
        return self.to_payload()
