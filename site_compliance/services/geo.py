"""
Geolocation helpers - Nearest active job site for a GPS fix
"""
import math
from typing import Iterable, Optional

from site_compliance.models.job_site import JobSite

EARTH_RADIUS_M = 6371000


def calculate_distance(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """
    Calculate distance between two coordinates using Haversine formula

    Returns:
        float: Distance in meters
    """
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    delta_lat = math.radians(lat2 - lat1)
    delta_lng = math.radians(lng2 - lng1)

    a = (math.sin(delta_lat / 2) ** 2 +
         math.cos(lat1_rad) * math.cos(lat2_rad) *
         math.sin(delta_lng / 2) ** 2)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_M * c


def is_within_site_radius(lat: float, lng: float, site: JobSite) -> bool:
    return calculate_distance(lat, lng, site.js_lat, site.js_lng) <= site.js_radius_m


def find_nearest_site(lat: float, lng: float, sites: Iterable[JobSite]) -> Optional[JobSite]:
    """
    Return the closest active site whose radius contains the point, or None.

    Inactive sites are ignored. On an exact distance tie the site that comes
    first in `sites` wins.
    """
    nearest = None
    nearest_distance = math.inf

    for site in sites:
        if not site.js_active:
            continue

        distance = calculate_distance(lat, lng, site.js_lat, site.js_lng)
        if distance <= site.js_radius_m and distance < nearest_distance:
            nearest = site
            nearest_distance = distance

    return nearest
