# %%  [markdown]
# # Example Notebook
# This package downloads SILO weather data for a location or a Bureau of Meteorology
# weather station and returns it as a pandas DataFrame.
#
# Every call makes a live request to the SILO API, so keep date ranges modest while exploring.

# %%
import weathervane as wv

# the variables that can be requested, and their SILO codes
wv.weather_variables()[["variable_name", "pretty_name", "silo_code"]]

# %%  [markdown]
# ## Gridded data for a location
# `get_weather_data` queries the DataDrill dataset for any latitude/longitude inside the
# SILO raster extent. Coordinates outside Australia are rejected before a request is made.

# %%
lat, lng = -36.6844, 142.1868
print(wv.in_australia(lat, lng))

df = wv.get_weather_data(lat, lng, "2021-01-01", "2021-12-31", ["rainfall", "min_temp", "max_temp"])
df.head()

# %%  [markdown]
# Monthly totals and means with plain pandas:

# %%
monthly = df.set_index("Date").resample("MS").agg(
    {"Rainfall (mm)": "sum", "Minimum Temperature (degC)": "mean", "Maximum Temperature (degC)": "mean"}
)
monthly

# %%  [markdown]
# ## Station data
# Stations can be given by number or by a name that matches exactly one station.
# Spaces and punctuation in the name act as wildcards.

# %%
wv.StationRegistry().search_by_name("Adel", state="SA", rank=True)

# %%
station_df = wv.get_station_data("Adel (Waite)", "2020-01-01", "2020-01-31", ["rainfall", "max_temp"], pretty_names=False)
station_df.describe()

# %%  [markdown]
# Stations near the Waite Institute, closest first:

# %%
wv.StationRegistry().list_nearby(23031, radius_km=10)
