"""
Manifiesto de embarque de un viaje: orden de recogida desde la agencia, link de Google Maps
y resumen de check-in, a partir de un export JSON de viajes.

Uso (desde raíz del repo):
  python -m turismoflow.application.run_route_plan --trips trips.json --trip-id t1
  python -m turismoflow.application.run_route_plan --trips trips.json --trip-id t1 --company company.json --map
"""

import argparse
import json
from pathlib import Path
from typing import List, Optional

from turismoflow.application.config import DEFAULT_COMPANY_PROFILE, DEFAULT_ROUTING_POLICY
from turismoflow.core.report_engine import boarding_summary
from turismoflow.core.route_engine import plan_pickup_route, routable_passengers, whatsapp_link
from turismoflow.domain.models import RoutePlan, Trip
from turismoflow.infrastructure.company_profile_store import CompanyProfileStore
from turismoflow.infrastructure.record_loader import load_trip

DEFAULT_MAP_PATH = Path(__file__).resolve().parent / "route_plan_map.html"


def load_trips(path: Path) -> List[Trip]:
    """JSON list of trip rows, or {"trips": [...]}, with embedded passengers."""
    with open(path, encoding="utf-8") as f:
        raw = json.load(f)
    if isinstance(raw, dict):
        raw = raw.get("trips") or []
    return [load_trip(row) for row in raw]


def _find_trip(trips: List[Trip], trip_id: str) -> Optional[Trip]:
    return next((t for t in trips if t.id == trip_id), None)


def _build_map(plan: RoutePlan, out_path: Path, open_browser: bool = False) -> None:
    """Mapa Folium: agencia, paradas numeradas y la polilínea del recorrido."""
    import webbrowser
    import folium

    origin = (plan.origin_coordinates.lat, plan.origin_coordinates.lng)
    m = folium.Map(location=list(origin), zoom_start=12)
    folium.Marker(
        location=list(origin),
        popup=plan.origin_name,
        icon=folium.Icon(color="green", icon="building", prefix="fa"),
    ).add_to(m)

    path = [origin]
    for stop in plan.stops:
        coords = stop.passenger.boarding_coordinates
        if coords is None:
            continue
        point = (coords.lat, coords.lng)
        path.append(point)
        folium.CircleMarker(
            location=point,
            radius=8,
            color="blue",
            fill=True,
            fill_opacity=0.8,
            weight=2,
            popup=f"{stop.order}. {stop.passenger.name} · {stop.passenger.pax_count} pax",
        ).add_to(m)
    if len(path) > 1:
        folium.PolyLine(path, color="blue", weight=3, opacity=0.7).add_to(m)

    m.save(str(out_path))
    if open_browser:
        webbrowser.open(f"file://{out_path.resolve()}")
    print(f"\nMapa guardado: {out_path}")


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Orden de recogida y link de rota de un viaje")
    parser.add_argument("--trips", type=Path, required=True, help="JSON con los viajes (y pasajeros)")
    parser.add_argument("--trip-id", required=True, help="ID del viaje")
    parser.add_argument("--company", type=Path, default=None, help="JSON del perfil de la agencia")
    parser.add_argument("--map", action="store_true", help="Generar mapa HTML")
    parser.add_argument("--map-out", type=Path, default=DEFAULT_MAP_PATH, help="Ruta del mapa HTML")
    parser.add_argument("--open", action="store_true", help="Abrir el mapa en el navegador")
    args = parser.parse_args(argv)

    if not args.trips.exists():
        print(f"Error: no existe el fichero de viajes {args.trips}")
        return 1
    trip = _find_trip(load_trips(args.trips), args.trip_id)
    if trip is None:
        print(f"Error: viaje {args.trip_id} no encontrado en {args.trips}")
        return 1

    company = None
    if args.company is not None:
        company = CompanyProfileStore(args.company).load()
    company = company or DEFAULT_COMPANY_PROFILE

    plan = plan_pickup_route(trip, company, DEFAULT_ROUTING_POLICY)
    summary = boarding_summary(routable_passengers(trip.passengers))

    print(f"Viaje {trip.id}: {trip.destination} · {trip.date} {trip.time}")
    print(f"Saída: {plan.origin_name}")
    print("\n--- Ordem de embarque ---")
    if not plan.stops:
        print("  (Sem passageiros com localização para a rota.)")
    for stop in plan.stops:
        p = stop.passenger
        leg = f"{stop.leg_km:.2f} km" if stop.leg_km is not None else "sem coordenadas"
        print(
            f"  {stop.order:>2}. {p.boarding_time or trip.time}  {p.name} ({p.pax_count} pax)  "
            f"{p.boarding_location}  [{leg}]  [{p.boarding_status.value}]"
        )
        if p.phone:
            print(f"      {p.phone}  {whatsapp_link(p.phone)}")
    print(f"\n  Distância estimada: {plan.total_distance_km:.2f} km")
    print(f"  Rota: {plan.directions_url}")

    print("\n--- Check-in ---")
    print(f"  Total:      {summary.total_pax}")
    print(f"  Embarcados: {summary.boarded_pax}")
    print(f"  No-show:    {summary.no_show_pax}")
    print(f"  Pendentes:  {summary.pending_pax}")

    if args.map:
        _build_map(plan, args.map_out, open_browser=args.open)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
