# Build configuration list for the widget extension target.
#
# The list is always rebuilt from scratch. Replacing a target's list detaches
# and removes the previous list and its configurations before the new one is
# created, so no unreachable configuration nodes are left behind.

from dataclasses import dataclass
from typing import Dict, List, Optional, Union

from xcwidget.config import WidgetSettings
from xcwidget.xcode.graph import ProjectGraph
from xcwidget.xcode.model import (
    BuildSetting,
    PBXNativeTarget,
    Reference,
    XCBuildConfiguration,
    XCConfigurationList,
    YesNo,
)

SettingValue = Union[str, int, float, YesNo]

DEBUG = "Debug"
RELEASE = "Release"


@dataclass(frozen=True)
class WidgetSetting:
    name: str  # Xcode build setting name
    debug: Optional[SettingValue]  # None leaves the setting out of Debug
    release: Optional[SettingValue]  # None leaves the setting out of Release


# Settings that do not depend on the caller
WIDGET_SETTINGS: List[WidgetSetting] = [
    WidgetSetting("ASSETCATALOG_COMPILER_GLOBAL_ACCENT_COLOR_NAME", "AccentColor", "AccentColor"),
    WidgetSetting("ASSETCATALOG_COMPILER_WIDGET_BACKGROUND_COLOR_NAME", "WidgetBackground", "WidgetBackground"),
    WidgetSetting("CLANG_ANALYZER_NONNULL", YesNo.YES, YesNo.YES),
    WidgetSetting("CLANG_ANALYZER_NUMBER_OBJECT_CONVERSION", YesNo.YES_AGGRESSIVE, YesNo.YES_AGGRESSIVE),
    WidgetSetting("CLANG_CXX_LANGUAGE_STANDARD", "gnu++20", "gnu++20"),
    WidgetSetting("CLANG_ENABLE_OBJC_WEAK", YesNo.YES, YesNo.YES),
    WidgetSetting("CLANG_WARN_DOCUMENTATION_COMMENTS", YesNo.YES, YesNo.YES),
    WidgetSetting("CLANG_WARN_QUOTED_INCLUDE_IN_FRAMEWORK_HEADER", YesNo.YES, YesNo.YES),
    WidgetSetting("CLANG_WARN_UNGUARDED_AVAILABILITY", YesNo.YES_AGGRESSIVE, YesNo.YES_AGGRESSIVE),
    WidgetSetting("CODE_SIGN_STYLE", "Automatic", "Automatic"),
    WidgetSetting("COPY_PHASE_STRIP", None, YesNo.NO),
    WidgetSetting("DEBUG_INFORMATION_FORMAT", "dwarf", "dwarf-with-dsym"),
    WidgetSetting("GCC_C_LANGUAGE_STANDARD", "gnu11", "gnu11"),
    WidgetSetting("GENERATE_INFOPLIST_FILE", YesNo.YES, YesNo.YES),
    WidgetSetting("INFOPLIST_KEY_NSHumanReadableCopyright", "", ""),
    WidgetSetting(
        "LD_RUNPATH_SEARCH_PATHS",
        "$(inherited) @executable_path/Frameworks @executable_path/../../Frameworks",
        "$(inherited) @executable_path/Frameworks @executable_path/../../Frameworks",
    ),
    WidgetSetting("MARKETING_VERSION", 1.0, 1.0),
    WidgetSetting("MTL_ENABLE_DEBUG_INFO", "INCLUDE_SOURCE", None),
    WidgetSetting("MTL_FAST_MATH", YesNo.YES, YesNo.YES),
    WidgetSetting("PRODUCT_NAME", "$(TARGET_NAME)", "$(TARGET_NAME)"),
    WidgetSetting("SKIP_INSTALL", YesNo.YES, YesNo.YES),
    WidgetSetting("SWIFT_ACTIVE_COMPILATION_CONDITIONS", "DEBUG", None),
    WidgetSetting("SWIFT_EMIT_LOC_STRINGS", YesNo.YES, YesNo.YES),
    WidgetSetting("SWIFT_OPTIMIZATION_LEVEL", "-Onone", "-Owholemodule"),
    WidgetSetting("SWIFT_VERSION", "5", "5"),
    WidgetSetting("TARGETED_DEVICE_FAMILY", "1,2", "1,2"),
]


def widget_build_settings(
    settings: WidgetSettings, configuration: str
) -> Dict[str, BuildSetting]:
    if configuration not in (DEBUG, RELEASE):
        raise ValueError(f"unsupported build configuration {configuration}")
    build_settings: Dict[str, BuildSetting] = {}
    for setting in WIDGET_SETTINGS:
        value = setting.debug if configuration == DEBUG else setting.release
        if value is not None:
            build_settings[setting.name] = BuildSetting(value=value)
    # Caller-supplied values
    build_settings.update(
        {
            "CURRENT_PROJECT_VERSION": BuildSetting(value=settings.current_project_version),
            "INFOPLIST_FILE": BuildSetting(value=f"{settings.cwd}/Info.plist"),
            "INFOPLIST_KEY_CFBundleDisplayName": BuildSetting(value=settings.name),
            "IPHONEOS_DEPLOYMENT_TARGET": BuildSetting(value=settings.deployment_target),
            "PRODUCT_BUNDLE_IDENTIFIER": BuildSetting(value=settings.bundle_id),
        }
    )
    return build_settings


def create_configuration_list(
    graph: ProjectGraph, settings: WidgetSettings
) -> XCConfigurationList:
    configs = [
        graph.create(
            XCBuildConfiguration,
            name=name,
            buildSettings=widget_build_settings(settings, name),
        )
        for name in (DEBUG, RELEASE)
    ]
    return graph.create(
        XCConfigurationList,
        buildConfigurations=[Reference(c.id, c.name) for c in configs],
        defaultConfigurationIsVisible=0,
        defaultConfigurationName=RELEASE,
    )


def remove_configuration_list(
    graph: ProjectGraph, config_list: XCConfigurationList
) -> None:
    # Configurations first: the list still points at them
    for config in graph.resolve_all(list(config_list.buildConfigurations)):
        for owner in graph.referrers(config):
            graph.remove_reference(owner, config.id)
        graph.remove_from_store(config)
    for owner in graph.referrers(config_list):
        graph.remove_reference(owner, config_list.id)
    graph.remove_from_store(config_list)


def replace_configuration_list(
    graph: ProjectGraph, target: PBXNativeTarget, settings: WidgetSettings
) -> XCConfigurationList:
    if target.buildConfigurationList is not None:
        remove_configuration_list(graph, graph.resolve(target.buildConfigurationList))
    config_list = create_configuration_list(graph, settings)
    graph.set_reference(
        target,
        "buildConfigurationList",
        config_list,
        f'Build configuration list for PBXNativeTarget "{target.name}"',
    )
    return config_list
