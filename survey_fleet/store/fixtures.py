"""Seed documents for the mock store and for seeding an empty database."""

import copy
from typing import Dict, List

from survey_fleet.store import collections

DRONES = [
    {
        "id": "D001",
        "name": "Surveyor Alpha",
        "model": "DJI Matrice 300 RTK",
        "status": "available",
        "battery": 85,
        "location": "Site A - Building 1",
        "lastMission": "2024-01-15 14:30",
        "totalFlightTime": 45.5,
        "coordinates": {"lat": 40.7128, "lng": -74.006},
        "maxAltitude": 150,
        "maxSpeed": 17,
        "sensors": ["RGB Camera", "Thermal Camera", "LiDAR"],
        "specifications": {
            "maxFlightTime": 55,
            "maxPayload": 2.7,
            "operatingTemperature": "-20°C to 50°C",
            "windResistance": "15 m/s",
        },
        "maintenanceStatus": "good",
        "lastMaintenance": "2024-01-10",
        "nextMaintenance": "2024-02-10",
    },
    {
        "id": "D002",
        "name": "Mapper Beta",
        "model": "DJI Phantom 4 RTK",
        "status": "in-mission",
        "battery": 67,
        "location": "Site B - Warehouse",
        "lastMission": "2024-01-15 16:00",
        "totalFlightTime": 32.2,
        "coordinates": {"lat": 40.7589, "lng": -73.9851},
        "maxAltitude": 120,
        "maxSpeed": 20,
        "sensors": ["RGB Camera", "RTK GPS"],
        "specifications": {
            "maxFlightTime": 30,
            "maxPayload": 0.5,
            "operatingTemperature": "0°C to 40°C",
            "windResistance": "10 m/s",
        },
        "maintenanceStatus": "good",
        "lastMaintenance": "2024-01-08",
        "nextMaintenance": "2024-02-08",
    },
    {
        "id": "D003",
        "name": "Inspector Gamma",
        "model": "Autel EVO II Pro",
        "status": "charging",
        "battery": 23,
        "location": "Base Station",
        "lastMission": "2024-01-15 12:15",
        "totalFlightTime": 67.8,
        "coordinates": {"lat": 40.7505, "lng": -73.9934},
        "maxAltitude": 140,
        "maxSpeed": 15,
        "sensors": ["RGB Camera", "Thermal Camera"],
        "specifications": {
            "maxFlightTime": 40,
            "maxPayload": 1.0,
            "operatingTemperature": "-10°C to 40°C",
            "windResistance": "12 m/s",
        },
        "maintenanceStatus": "good",
        "lastMaintenance": "2024-01-12",
        "nextMaintenance": "2024-02-12",
    },
    {
        "id": "D004",
        "name": "Scout Delta",
        "model": "DJI Mini 3 Pro",
        "status": "available",
        "battery": 92,
        "location": "Site C - Parking Lot",
        "lastMission": "2024-01-15 10:45",
        "totalFlightTime": 28.9,
        "coordinates": {"lat": 40.7282, "lng": -74.0776},
        "maxAltitude": 100,
        "maxSpeed": 16,
        "sensors": ["RGB Camera"],
        "specifications": {
            "maxFlightTime": 34,
            "maxPayload": 0.249,
            "operatingTemperature": "-10°C to 40°C",
            "windResistance": "10.7 m/s",
        },
        "maintenanceStatus": "good",
        "lastMaintenance": "2024-01-05",
        "nextMaintenance": "2024-02-05",
    },
    {
        "id": "D005",
        "name": "Guardian Echo",
        "model": "DJI Matrice 30T",
        "status": "maintenance",
        "battery": 0,
        "location": "Maintenance Bay",
        "lastMission": "2024-01-14 18:20",
        "totalFlightTime": 89.3,
        "coordinates": {"lat": 40.7614, "lng": -73.9776},
        "maxAltitude": 160,
        "maxSpeed": 23,
        "sensors": ["RGB Camera", "Thermal Camera", "Zoom Camera"],
        "specifications": {
            "maxFlightTime": 41,
            "maxPayload": 0.9,
            "operatingTemperature": "-20°C to 50°C",
            "windResistance": "15 m/s",
        },
        "maintenanceStatus": "maintenance",
        "lastMaintenance": "2024-01-15",
        "nextMaintenance": "2024-01-20",
    },
]

MISSIONS = [
    {
        "id": "M001",
        "name": "Site A Comprehensive Facility Inspection",
        "description": "Detailed thermal and visual inspection of Site A facilities including structural analysis",
        "droneId": "D002",
        "droneName": "Mapper Beta",
        "status": "in-progress",
        "progress": 65,
        "startTime": "2024-01-15T14:30:00Z",
        "estimatedEndTime": "2024-01-15T16:00:00Z",
        "surveyType": "Facility Inspection",
        "location": "Site A - Building 1",
        "coordinates": [
            {"lat": 40.7128, "lng": -74.006},
            {"lat": 40.7138, "lng": -74.005},
            {"lat": 40.7148, "lng": -74.007},
            {"lat": 40.7118, "lng": -74.008},
        ],
        "altitude": 50,
        "flightPattern": "Grid Pattern",
        "sensors": ["RGB Camera", "Thermal Camera"],
        "overlap": 70,
        "speed": 5,
        "dataCollectionFrequency": 2,
        "estimatedDistance": 12.5,
        "estimatedDuration": 90,
        "priority": "high",
        "weatherConditions": {"temperature": 22, "windSpeed": 8, "visibility": "good", "precipitation": "none"},
    },
    {
        "id": "M002",
        "name": "Perimeter Security Patrol - Zone B",
        "description": "Automated security patrol with thermal imaging for perimeter monitoring",
        "droneId": "D005",
        "droneName": "Guardian Echo",
        "status": "completed",
        "progress": 100,
        "startTime": "2024-01-15T12:00:00Z",
        "estimatedEndTime": "2024-01-15T13:30:00Z",
        "actualEndTime": "2024-01-15T13:25:00Z",
        "surveyType": "Security Patrol",
        "location": "Site B - Perimeter",
        "coordinates": [
            {"lat": 40.7589, "lng": -73.9851},
            {"lat": 40.7599, "lng": -73.9841},
            {"lat": 40.7609, "lng": -73.9861},
            {"lat": 40.7579, "lng": -73.9871},
        ],
        "altitude": 75,
        "flightPattern": "Perimeter Pattern",
        "sensors": ["RGB Camera", "Thermal Camera"],
        "overlap": 60,
        "speed": 8,
        "dataCollectionFrequency": 1,
        "estimatedDistance": 8.2,
        "estimatedDuration": 85,
        "priority": "medium",
        "weatherConditions": {"temperature": 20, "windSpeed": 5, "visibility": "excellent", "precipitation": "none"},
    },
    {
        "id": "M003",
        "name": "Warehouse Complex Mapping Survey",
        "description": "High-resolution mapping with LiDAR for warehouse expansion planning",
        "droneId": "D001",
        "droneName": "Surveyor Alpha",
        "status": "scheduled",
        "progress": 0,
        "startTime": "2024-01-15T18:00:00Z",
        "estimatedEndTime": "2024-01-15T20:30:00Z",
        "surveyType": "Site Mapping",
        "location": "Site C - Warehouse Complex",
        "coordinates": [
            {"lat": 40.7282, "lng": -74.0776},
            {"lat": 40.7292, "lng": -74.0766},
            {"lat": 40.7302, "lng": -74.0786},
            {"lat": 40.7272, "lng": -74.0796},
        ],
        "altitude": 60,
        "flightPattern": "Crosshatch Pattern",
        "sensors": ["RGB Camera", "LiDAR", "Multispectral"],
        "overlap": 80,
        "speed": 4,
        "dataCollectionFrequency": 3,
        "estimatedDistance": 18.7,
        "estimatedDuration": 150,
        "priority": "high",
        "weatherConditions": {"temperature": 18, "windSpeed": 12, "visibility": "good", "precipitation": "light clouds"},
    },
    {
        "id": "M004",
        "name": "Environmental Monitoring - Industrial Zone",
        "description": "Environmental data collection with multispectral analysis for compliance monitoring",
        "droneId": "D004",
        "droneName": "Scout Delta",
        "status": "paused",
        "progress": 35,
        "startTime": "2024-01-15T15:45:00Z",
        "estimatedEndTime": "2024-01-15T17:15:00Z",
        "surveyType": "Environmental Monitoring",
        "location": "Site D - Industrial Area",
        "coordinates": [
            {"lat": 40.7505, "lng": -73.9934},
            {"lat": 40.7515, "lng": -73.9924},
            {"lat": 40.7525, "lng": -73.9944},
            {"lat": 40.7495, "lng": -73.9954},
        ],
        "altitude": 45,
        "flightPattern": "Spiral Pattern",
        "sensors": ["Multispectral", "Thermal Camera"],
        "overlap": 65,
        "speed": 6,
        "dataCollectionFrequency": 4,
        "estimatedDistance": 14.3,
        "estimatedDuration": 90,
        "priority": "medium",
        "weatherConditions": {"temperature": 25, "windSpeed": 6, "visibility": "good", "precipitation": "none"},
    },
]

SURVEYS = [
    {
        "id": "S001",
        "missionId": "M001",
        "name": "Site A Comprehensive Facility Inspection",
        "date": "2024-01-15",
        "duration": "1h 30m",
        "distance": "12.5 km",
        "area": "45 hectares",
        "drone": "Mapper Beta",
        "status": "completed",
        "dataPoints": 1250,
        "images": 340,
        "thermalImages": 85,
        "videoFootage": "2.5 hours",
        "coverage": "98.5%",
        "accuracy": "±2cm",
        "weatherConditions": "Clear, 22°C, Wind 8km/h",
        "anomaliesDetected": 3,
        "reportUrl": "/reports/survey-001.pdf",
    },
    {
        "id": "S002",
        "missionId": "M002",
        "name": "Perimeter Security Patrol - Zone B",
        "date": "2024-01-15",
        "duration": "1h 25m",
        "distance": "8.2 km",
        "area": "28 hectares",
        "drone": "Guardian Echo",
        "status": "completed",
        "dataPoints": 890,
        "images": 180,
        "thermalImages": 45,
        "videoFootage": "1.4 hours",
        "coverage": "100%",
        "accuracy": "±5cm",
        "weatherConditions": "Clear, 20°C, Wind 5km/h",
        "anomaliesDetected": 0,
        "reportUrl": "/reports/survey-002.pdf",
    },
    {
        "id": "S003",
        "missionId": "M003",
        "name": "Warehouse Complex Mapping Survey",
        "date": "2024-01-14",
        "duration": "2h 15m",
        "distance": "18.7 km",
        "area": "62 hectares",
        "drone": "Surveyor Alpha",
        "status": "completed",
        "dataPoints": 2100,
        "images": 520,
        "thermalImages": 0,
        "videoFootage": "2.2 hours",
        "coverage": "99.2%",
        "accuracy": "±1cm",
        "weatherConditions": "Partly cloudy, 18°C, Wind 12km/h",
        "anomaliesDetected": 1,
        "reportUrl": "/reports/survey-003.pdf",
    },
    {
        "id": "S004",
        "missionId": "M004",
        "name": "Environmental Monitoring - Industrial Zone",
        "date": "2024-01-14",
        "duration": "1h 45m",
        "distance": "14.3 km",
        "area": "38 hectares",
        "drone": "Scout Delta",
        "status": "completed",
        "dataPoints": 1680,
        "images": 290,
        "thermalImages": 72,
        "videoFootage": "1.7 hours",
        "coverage": "96.8%",
        "accuracy": "±3cm",
        "weatherConditions": "Clear, 25°C, Wind 6km/h",
        "anomaliesDetected": 2,
        "reportUrl": "/reports/survey-004.pdf",
    },
]

FLIGHT_STATS = [
    {"id": "FS001", "month": "Jan", "flights": 45, "hours": 120, "distance": 850, "surveys": 38, "efficiency": 92.5},
    {"id": "FS002", "month": "Feb", "flights": 52, "hours": 140, "distance": 920, "surveys": 44, "efficiency": 89.2},
    {"id": "FS003", "month": "Mar", "flights": 38, "hours": 95, "distance": 680, "surveys": 32, "efficiency": 91.8},
    {"id": "FS004", "month": "Apr", "flights": 61, "hours": 165, "distance": 1100, "surveys": 55, "efficiency": 88.7},
    {"id": "FS005", "month": "May", "flights": 48, "hours": 130, "distance": 890, "surveys": 41, "efficiency": 90.3},
    {"id": "FS006", "month": "Jun", "flights": 55, "hours": 148, "distance": 980, "surveys": 47, "efficiency": 93.1},
]

ORGANIZATION_STATS = [
    {
        "id": "main",
        "totalDrones": 5,
        "totalMissions": 4,
        "completedMissions": 2,
        "totalSurveys": 4,
        "totalFlightHours": 263.7,
        "totalDistance": 4440,
        "totalDataPoints": 5920,
        "totalImages": 1330,
        "averageEfficiency": 90.9,
    },
]

MISSION_PATTERNS = [
    {
        "id": "MP001",
        "name": "Grid Pattern",
        "description": "Systematic grid coverage for comprehensive area mapping",
        "type": "grid",
        "parameters": {"spacing": 50, "overlap": 70, "direction": "north-south"},
        "efficiency": 95,
        "bestFor": ["mapping", "inspection", "surveying"],
    },
    {
        "id": "MP002",
        "name": "Crosshatch Pattern",
        "description": "Overlapping grid pattern for maximum coverage and accuracy",
        "type": "crosshatch",
        "parameters": {"spacing": 40, "overlap": 80, "angles": [0, 90]},
        "efficiency": 98,
        "bestFor": ["high-precision mapping", "detailed inspection"],
    },
    {
        "id": "MP003",
        "name": "Perimeter Pattern",
        "description": "Follow boundary lines for security and perimeter monitoring",
        "type": "perimeter",
        "parameters": {"offset": 10, "loops": 2, "direction": "clockwise"},
        "efficiency": 85,
        "bestFor": ["security", "perimeter monitoring", "boundary surveys"],
    },
    {
        "id": "MP004",
        "name": "Spiral Pattern",
        "description": "Spiral from center outward for focused area coverage",
        "type": "spiral",
        "parameters": {"startRadius": 20, "spacing": 30, "direction": "outward"},
        "efficiency": 88,
        "bestFor": ["environmental monitoring", "point-of-interest surveys"],
    },
]


def default_seed() -> Dict[str, List[dict]]:
    return copy.deepcopy({
        collections.DRONES: DRONES,
        collections.MISSIONS: MISSIONS,
        collections.SURVEYS: SURVEYS,
        collections.FLIGHT_STATS: FLIGHT_STATS,
        collections.ORGANIZATION_STATS: ORGANIZATION_STATS,
        collections.MISSION_PATTERNS: MISSION_PATTERNS,
    })
