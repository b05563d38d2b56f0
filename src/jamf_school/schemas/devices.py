"""Schemas for the /devices routes."""
from typing import Literal, Optional

from pydantic import Field

from .base import DeviceActionResponse, Int32, StrictModel

EnrollType = Literal["manual", "ac2", "ac2Pending", "dep", "depPending"]


class DeviceOS(StrictModel):
    prefix: str
    version: str


class DeviceModel(StrictModel):
    name: str
    identifier: str
    type: str


class VPPAccount(StrictModel):
    status: str


class DeviceOwner(StrictModel):
    id: Int32
    locationId: Int32
    name: str
    vpp: list[VPPAccount]
    username: Optional[str] = None
    email: Optional[str] = None
    firstName: Optional[str] = None
    lastName: Optional[str] = None
    notes: Optional[str] = None
    modified: Optional[str] = None


class DeviceRegion(StrictModel):
    # The service really does name this key "string".
    string: str
    coordinates: Optional[str] = None


class InstalledApp(StrictModel):
    name: str
    identifier: str
    version: str
    vendor: str
    icon: str


class ServiceSubscription(StrictModel):
    CarrierSettingsVersion: str
    CurrentCarrierNetwork: str
    CurrentMCC: str
    CurrentMNC: str
    ICCID: str
    IMEI: str
    IsDataPreferred: bool
    IsRoaming: bool
    IsVoicePreferred: bool
    Label: str
    LabelID: str
    PhoneNumber: str
    Slot: str
    MEID: Optional[str] = None
    EID: Optional[str] = None


class NetworkInformation(StrictModel):
    IPAddress: str
    isNetworkTethered: str
    BluetoothMAC: str
    WiFiMAC: str
    VoiceRoamingEnabled: str
    DataRoamingEnabled: str
    PersonalHotspotEnabled: str
    EthernetMACs: Optional[str] = None
    ServiceSubscription: Optional[list[ServiceSubscription]] = None


class DeviceRecord(StrictModel):
    """One device as returned by GET /devices and GET /devices/:udid."""

    UDID: str
    locationId: Int32
    serialNumber: str
    name: str
    isManaged: bool
    isSupervised: bool
    device_class: str = Field(alias="class")
    assetTag: str
    os: DeviceOS
    model: DeviceModel
    owner: DeviceOwner
    groups: list[str]
    enrollType: EnrollType
    batteryLevel: float
    totalCapacity: float
    availableCapacity: float
    iCloudBackupEnabled: bool
    iCloudBackupLatest: str
    iTunesStoreLoggedIn: bool
    modified: str
    lastCheckin: str
    depProfile: str
    notes: str
    region: DeviceRegion
    networkInformation: NetworkInformation
    isBootstrapStored: Optional[bool] = None
    apps: Optional[list[InstalledApp]] = None


class DevicesResponse(StrictModel):
    code: Int32
    count: Int32
    devices: list[DeviceRecord]


class DeviceResponse(StrictModel):
    code: Int32
    device: DeviceRecord


class DeviceGroupRecord(StrictModel):
    """One device group as returned by GET /devices/groups(/:id)."""

    id: Int32
    locationId: Int32
    name: str
    description: str
    information: str
    imageUrl: str
    isSmartGroup: bool
    isShared: bool
    type: str
    members: Int32


class DeviceGroupsResponse(StrictModel):
    code: Int32
    count: Int32
    deviceGroups: list[DeviceGroupRecord]


class DeviceGroupResponse(StrictModel):
    code: Int32
    deviceGroup: DeviceGroupRecord


class RestartDeviceResponse(DeviceActionResponse):
    pass


class WipeDeviceResponse(DeviceActionResponse):
    pass
