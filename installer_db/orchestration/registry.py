"""
Adapter Registry

Declarative list of the sources a run fetches, in run order. Selecting or
dropping a source is a data change (enabled flag or DISABLED_SOURCES setting),
not a code change in the entry point.
"""

from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional

from ..sources.base import BaseAdapter, HttpFetcher
from ..sources import installers

AdapterFactory = Callable[[Optional[HttpFetcher]], BaseAdapter]


@dataclass(frozen=True)
class AdapterRegistration:
    """One registered source"""
    name: str
    description: str
    factory: AdapterFactory
    enabled: bool = True


DEFAULT_REGISTRY: List[AdapterRegistration] = [
    AdapterRegistration('sdkmanager', 'android sdkmanager', installers.android_sdkmanager),
    AdapterRegistration('cygwin', 'cygwin installer', installers.cygwin_installer),
    AdapterRegistration('msys2', 'msys2 installer', installers.msys2_installer),
    AdapterRegistration('rustup', 'rust installer', installers.rustup_installer),
    AdapterRegistration('vscode', 'vscode', installers.vscode),
    AdapterRegistration('miniconda', 'miniconda', installers.miniconda),
]


def active_registrations(registry: Iterable[AdapterRegistration],
                         disabled: Iterable[str] = ()) -> List[AdapterRegistration]:
    """Enabled registrations not named in ``disabled``, in registry order"""
    disabled = set(disabled)
    return [reg for reg in registry if reg.enabled and reg.name not in disabled]
