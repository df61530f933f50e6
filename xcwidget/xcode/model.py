# Xcode project object model.
#
# This module defines the node types of an Xcode project object graph (.pbxproj)
# that the widget synchronizer reads and mutates. Nodes reference each other
# through Reference values; identifiers are assigned by the graph store.

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Union, TypeVar, Generic
from abc import ABC, abstractmethod

import os
import uuid


# Type definition for Xcode object identifiers
class XcodeID(str):
    pass


def generate_id(key: str) -> XcodeID:
    return XcodeID(uuid.uuid5(uuid.NAMESPACE_X500, key).hex.upper()[:24])


# Source Tree values used in PBXFileReference and PBXGroup
class SourceTree(Enum):
    # GROUP - relative to the enclosing group's path
    GROUP = "<group>"
    SOURCE_ROOT = "SOURCE_ROOT"
    # SDKROOT - system frameworks, path relative to the active SDK
    SDKROOT = "SDKROOT"
    # BUILT_PRODUCTS_DIR - for product references only
    BUILT_PRODUCTS_DIR = "BUILT_PRODUCTS_DIR"


# Destination subfolder specifications used in PBXCopyFilesBuildPhase
class DstSubfolderSpec(Enum):
    ABSOLUTE_PATH = 0  # Absolute path
    WRAPPER = 1  # App bundle
    EXECUTABLES = 6  # Executables
    RESOURCES = 7  # Resources
    FRAMEWORKS = 10  # Frameworks
    SHARED_FRAMEWORKS = 11  # Shared Frameworks
    SHARED_SUPPORT = 12  # Shared Support
    PLUGINS = 13  # Plug-ins, where Foundation extensions are embedded
    JAVA_RESOURCES = 15  # Java Resources
    PRODUCTS_DIRECTORY = 16  # Products Directory


# File types used in PBXFileReference
class FileType(Enum):
    SWIFT = "sourcecode.swift"
    OBJC = "sourcecode.c.objc"
    C_HEADER = "sourcecode.c.h"
    PLIST = "text.plist.xml"
    STRINGS = "text.plist.strings"
    ASSET_CATALOG = "folder.assetcatalog"
    INTENT_DEFINITION = "file.intentdefinition"
    FRAMEWORK = "wrapper.framework"
    APP = "wrapper.application"
    APP_EXTENSION = "wrapper.app-extension"
    TEXT = "text"
    FOLDER = "folder"

    @staticmethod
    def from_extension(ext: str) -> "FileType":
        if ext.startswith("."):
            ext = ext[1:]

        ext_to_type = {
            "swift": FileType.SWIFT,
            "m": FileType.OBJC,
            "h": FileType.C_HEADER,
            "plist": FileType.PLIST,
            "strings": FileType.STRINGS,
            "xcassets": FileType.ASSET_CATALOG,
            "intentdefinition": FileType.INTENT_DEFINITION,
            "framework": FileType.FRAMEWORK,
            "app": FileType.APP,
            "appex": FileType.APP_EXTENSION,
        }

        return ext_to_type.get(ext.lower(), FileType.TEXT)


# Product types used in PBXNativeTarget
class ProductType(Enum):
    APPLICATION = "com.apple.product-type.application"
    FRAMEWORK = "com.apple.product-type.framework"
    STATIC_LIBRARY = "com.apple.product-type.library.static"
    BUNDLE = "com.apple.product-type.bundle"
    UNIT_TEST_BUNDLE = "com.apple.product-type.unit-test.bundle"
    APP_EXTENSION = "com.apple.product-type.app-extension"


# Boolean-like values used in build settings
class YesNo(Enum):
    YES = "YES"
    NO = "NO"
    YES_AGGRESSIVE = "YES_AGGRESSIVE"


class ProxyType(Enum):
    TARGET_DEPENDENCY = 1  # For target dependencies
    PRODUCT_REFERENCE = 2  # For product references


# Build setting with type-safe value
@dataclass
class BuildSetting:
    value: Union[YesNo, int, float, str, List[str]]


ReferenceT = TypeVar("ReferenceT", bound="XcodeObject")


@dataclass
class Reference(Generic[ReferenceT]):
    id: XcodeID
    comment: Optional[str] = None


# Base class for all Xcode objects
@dataclass
class XcodeObject(ABC):
    # Assigned by ProjectGraph.add()
    id: XcodeID = field(init=False, default=XcodeID(""), repr=False)

    @property
    def isa(self) -> str:
        return self.__class__.__name__

    # Seed for identifier generation, need not be unique
    @abstractmethod
    def key(self) -> str:
        pass


# PBX* object types
@dataclass
class PBXFileReference(XcodeObject):
    path: str
    sourceTree: SourceTree = SourceTree.GROUP
    name: Optional[str] = None
    lastKnownFileType: Optional[FileType] = None
    explicitFileType: Optional[FileType] = None
    includeInIndex: Optional[int] = None

    @property
    def display_name(self) -> str:
        return self.name if self.name else os.path.basename(self.path)

    @property
    def file_type(self) -> Optional[FileType]:
        return self.explicitFileType or self.lastKnownFileType

    def key(self) -> str:
        return f"PBXFileReference:{self.sourceTree.name}:{self.path}"


@dataclass
class PBXBuildFile(XcodeObject):
    fileRef: Reference[PBXFileReference]
    settings: Optional[Dict[str, List[str]]] = None

    def key(self) -> str:
        return f"PBXBuildFile:{self.fileRef.id}"


@dataclass
class PBXSourcesBuildPhase(XcodeObject):
    files: List[Reference[PBXBuildFile]] = field(default_factory=list)
    buildActionMask: int = 2147483647
    runOnlyForDeploymentPostprocessing: int = 0

    def key(self) -> str:
        return self.__class__.__name__


@dataclass
class PBXFrameworksBuildPhase(XcodeObject):
    files: List[Reference[PBXBuildFile]] = field(default_factory=list)
    buildActionMask: int = 2147483647
    runOnlyForDeploymentPostprocessing: int = 0

    def key(self) -> str:
        return self.__class__.__name__


@dataclass
class PBXResourcesBuildPhase(XcodeObject):
    files: List[Reference[PBXBuildFile]] = field(default_factory=list)
    buildActionMask: int = 2147483647
    runOnlyForDeploymentPostprocessing: int = 0

    def key(self) -> str:
        return self.__class__.__name__


@dataclass
class PBXCopyFilesBuildPhase(XcodeObject):
    files: List[Reference[PBXBuildFile]] = field(default_factory=list)
    name: Optional[str] = None
    dstPath: str = ""
    dstSubfolderSpec: DstSubfolderSpec = DstSubfolderSpec.PLUGINS
    buildActionMask: int = 2147483647
    runOnlyForDeploymentPostprocessing: int = 0

    def key(self) -> str:
        return f"{self.__class__.__name__}:{self.name}:{self.dstSubfolderSpec.name}"


BuildPhase = Union[
    PBXSourcesBuildPhase,
    PBXFrameworksBuildPhase,
    PBXResourcesBuildPhase,
    PBXCopyFilesBuildPhase,
]


@dataclass
class PBXGroup(XcodeObject):
    children: List[Reference[Union["PBXGroup", PBXFileReference]]] = field(
        default_factory=list
    )
    name: Optional[str] = None
    path: Optional[str] = None
    sourceTree: SourceTree = SourceTree.GROUP

    @property
    def display_name(self) -> str:
        if self.name:
            return self.name
        return os.path.basename(self.path) if self.path else ""

    def key(self) -> str:
        return f"PBXGroup:{self.name}:{self.path}"


@dataclass
class PBXContainerItemProxy(XcodeObject):
    containerPortal: Reference["PBXProject"]  # The project holding the target
    remoteGlobalIDString: XcodeID  # ID of the referenced target
    remoteInfo: str  # Name of the referenced target
    proxyType: ProxyType = ProxyType.TARGET_DEPENDENCY

    def key(self) -> str:
        return f"PBXContainerItemProxy:{self.containerPortal.id}:{self.remoteGlobalIDString}:{self.remoteInfo}"


@dataclass
class PBXTargetDependency(XcodeObject):
    targetProxy: Reference[PBXContainerItemProxy]
    target: Optional[Reference["PBXNativeTarget"]] = None

    def key(self) -> str:
        target_id = self.target.id if self.target else "None"
        return f"PBXTargetDependency:{self.targetProxy.id}:{target_id}"


@dataclass
class XCBuildConfiguration(XcodeObject):
    name: str
    buildSettings: Dict[str, BuildSetting] = field(default_factory=dict)

    def key(self) -> str:
        return f"XCBuildConfiguration:{self.name}"


@dataclass
class XCConfigurationList(XcodeObject):
    buildConfigurations: List[Reference[XCBuildConfiguration]]
    defaultConfigurationIsVisible: int = 0
    defaultConfigurationName: str = "Release"

    def key(self) -> str:
        ids = ",".join(ref.id for ref in self.buildConfigurations)
        return f"XCConfigurationList:{ids}:{self.defaultConfigurationName}"


@dataclass
class PBXNativeTarget(XcodeObject):
    name: str
    buildConfigurationList: Optional[Reference[XCConfigurationList]]
    productName: str
    productType: ProductType
    productReference: Optional[Reference[PBXFileReference]] = None
    buildPhases: List[Reference[BuildPhase]] = field(default_factory=list)
    dependencies: List[Reference[PBXTargetDependency]] = field(default_factory=list)
    buildRules: List[Reference[XcodeObject]] = field(default_factory=list)

    def key(self) -> str:
        return f"PBXNativeTarget:{self.name}"


@dataclass
class PBXProject(XcodeObject):
    buildConfigurationList: Optional[Reference[XCConfigurationList]]
    mainGroup: Reference[PBXGroup]
    productRefGroup: Optional[Reference[PBXGroup]] = None
    targets: List[Reference[PBXNativeTarget]] = field(default_factory=list)
    compatibilityVersion: str = "Xcode 14.0"
    developmentRegion: str = "en"
    hasScannedForEncodings: int = 0
    knownRegions: List[str] = field(default_factory=lambda: ["en", "Base"])
    projectDirPath: str = ""
    projectRoot: str = ""

    def key(self) -> str:
        return f"PBXProject:{self.mainGroup.id}"
