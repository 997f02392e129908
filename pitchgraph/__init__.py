"""PitchGraph core: coordinator tree, player statistics API client and local stores."""
