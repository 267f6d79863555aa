"""Core data models shared across docplan components."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional, Tuple, Union


class ComponentType(Enum):
    """Closed set of development component kinds.

    Each member carries its display label and whether components of that kind
    can contain documentable (Java) sources.
    """

    JAVA = ("Java", True)
    J2EE_WEB_MODULE = ("J2EEWebModule", True)
    J2EE_EJB_MODULE = ("J2EEEjbModule", True)
    J2EE_ENTERPRISE_APPLICATION = ("J2EEEnterpriseApplication", False)
    J2EE_SERVER_LIBRARY = ("J2EEServerComponentLibrary", False)
    PORTAL_APPLICATION_MODULE = ("PortalApplicationModule", True)
    PORTAL_APPLICATION_STANDALONE = ("PortalApplicationStandalone", True)
    WEB_DYNPRO = ("WebDynpro", True)
    WEB_SERVICES_PROXY = ("WebServicesDeployableProxy", True)
    EXTERNAL_LIBRARY = ("ExternalLibrary", False)
    DICTIONARY = ("Dictionary", False)
    CONTENT_MODULE = ("ContentModule", False)
    SOFTWARE_COMPONENT_DESCRIPTION = ("SoftwareComponentDescription", False)

    def __init__(self, label: str, can_contain_sources: bool) -> None:
        self.label = label
        self.can_contain_sources = can_contain_sources

    @classmethod
    def from_name(cls, value: str) -> Optional["ComponentType"]:
        """Return the member matching a label or member name, ignoring case."""
        wanted = value.strip().lower()
        for member in cls:
            if wanted in (member.label.lower(), member.name.lower()):
                return member
        return None


class CompartmentState(Enum):
    """Lifecycle state of a compartment."""

    SOURCE = ("Source", True)
    ARCHIVE = ("Archive", False)

    def __init__(self, label: str, documentable: bool) -> None:
        self.label = label
        self.documentable = documentable

    @classmethod
    def from_name(cls, value: str) -> Optional["CompartmentState"]:
        wanted = value.strip().lower()
        if wanted == "binary":
            return cls.ARCHIVE
        for member in cls:
            if wanted in (member.label.lower(), member.name.lower()):
                return member
        return None


@dataclass(frozen=True)
class UsedComponentReference:
    """Lookup key for a component another component depends on."""

    vendor: str
    name: str

    @property
    def key(self) -> Tuple[str, str]:
        return (self.vendor, self.name)


@dataclass
class Component:
    """A development component as supplied by the component registry."""

    vendor: str
    name: str
    component_type: ComponentType
    description: str = ""
    source_folders: List[str] = field(default_factory=list)
    output_folder: Optional[str] = None
    classpath: List[str] = field(default_factory=list)
    used_components: List[UsedComponentReference] = field(default_factory=list)
    compartment: Optional["Compartment"] = field(default=None, repr=False, compare=False)

    @property
    def key(self) -> Tuple[str, str]:
        return (self.vendor, self.name)


@dataclass
class Compartment:
    """A versioned grouping of components sharing one lifecycle state."""

    name: str
    vendor: str
    software_component: str
    state: CompartmentState
    caption: str = ""
    components: List[Component] = field(default_factory=list)

    def add(self, component: Component) -> None:
        """Register ``component`` as a member and point it back at us."""
        component.compartment = self
        self.components.append(component)

    def components_of_type(self, component_type: ComponentType) -> List[Component]:
        return [c for c in self.components if c.component_type is component_type]


@dataclass
class Configuration:
    """Root grouping of compartments built together."""

    caption: str
    compartments: List[Compartment] = field(default_factory=list)
    language_version: Optional[str] = None

    def add(self, compartment: Compartment) -> None:
        self.compartments.append(compartment)


@dataclass(frozen=True)
class ExternalLink:
    """Cross reference to documentation published at a URL."""

    url: str

    kind = "external"

    @property
    def target(self) -> str:
        return self.url


@dataclass(frozen=True)
class OfflineLink:
    """Cross reference to a dependency's locally generated documentation."""

    location: str
    package_list: str
    vendor: str
    name: str

    kind = "offline"

    @property
    def target(self) -> str:
        return self.location

    @property
    def key(self) -> Tuple[str, str]:
        return (self.vendor, self.name)


LinkTarget = Union[ExternalLink, OfflineLink]


@dataclass(frozen=True)
class BuildDescriptor:
    """Everything a documentation generator needs for one component."""

    vendor: str
    name: str
    component_key: str
    compartment: str
    source_paths: Tuple[str, ...]
    classpath: Tuple[str, ...]
    output_dir: str
    language_version: str
    header: str
    proxy_params: str
    links: Tuple[LinkTarget, ...]
    build_file: str
    use_uml_graph: bool = False

    @property
    def key(self) -> Tuple[str, str]:
        return (self.vendor, self.name)

    @property
    def offline_links(self) -> Tuple[OfflineLink, ...]:
        return tuple(link for link in self.links if isinstance(link, OfflineLink))


@dataclass(frozen=True)
class ComponentSummary:
    """Overview entry for one documented component."""

    vendor: str
    name: str
    folder: str
    description: str

    @property
    def key(self) -> Tuple[str, str]:
        return (self.vendor, self.name)


@dataclass(frozen=True)
class CompartmentOverview:
    name: str
    software_component: str
    vendor: str
    description: Optional[str]
    components: Tuple[ComponentSummary, ...]


@dataclass(frozen=True)
class OverviewModel:
    """Compartment-grouped index over all documented components."""

    caption: str
    compartments: Tuple[CompartmentOverview, ...]

    def components(self) -> Iterator[ComponentSummary]:
        for compartment in self.compartments:
            yield from compartment.components

    def compartment_names(self) -> List[str]:
        return [compartment.name for compartment in self.compartments]


@dataclass(frozen=True)
class StaleLink:
    """Offline link whose package index may not exist when it is needed."""

    source: Tuple[str, str]
    link: OfflineLink
    reason: str


@dataclass(frozen=True)
class BuildPlan:
    """Result of one planning pass."""

    overview: OverviewModel
    descriptors: Tuple[BuildDescriptor, ...]
    generation: Tuple[BuildDescriptor, ...]
    stale_links: Tuple[StaleLink, ...] = ()

    def generation_order(self) -> Tuple[BuildDescriptor, ...]:
        """Return descriptors in the order they should be generated."""
        return self.generation

    @property
    def build_files(self) -> List[str]:
        return [descriptor.build_file for descriptor in self.generation]
